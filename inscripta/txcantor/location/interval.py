"""
Half-open genomic intervals. All coordinates are 0-based, with an exclusive end.
"""
from dataclasses import dataclass

from Bio.SeqFeature import SimpleLocation

from inscripta.txcantor.exc import IntervalError
from inscripta.txcantor.location.strand import Strand


@dataclass(frozen=True)
class Interval:
    """An immutable ``[start, end)`` range over non-negative coordinates."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise IntervalError(f"Interval coordinates must be non-negative, got ({self.start}, {self.end})")
        if self.start > self.end:
            raise IntervalError(f"Interval start {self.start} is larger than its end {self.end}")

    def __str__(self):
        return f"{self.start}-{self.end}"

    def __len__(self):
        return self.span

    @property
    def span(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Interval") -> bool:
        """Returns True iff the two intervals share at least one position."""
        return self.start < other.end and other.start < self.end

    def envelops(self, other: "Interval") -> bool:
        """Returns True iff this interval completely contains the other."""
        return self.start <= other.start and self.end >= other.end

    def is_adjacent(self, other: "Interval") -> bool:
        """Returns True iff the two intervals touch without overlapping."""
        return self.end == other.start or self.start == other.end

    def to_biopython(self, strand: Strand = Strand.UNKNOWN) -> SimpleLocation:
        """Returns a BioPython location; unknown strand is exported as ``None``."""
        return SimpleLocation(self.start, self.end, strand=strand.value if strand.is_directional else None)
