"""
This module contains the abstract base class shared by every feature-bearing type: transcript sub-features,
transcripts and genes.
"""
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Dict, Any

from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand


class AbstractAnnotation(ABC):
    """A feature placed on a named sequence, with a half-open interval, a strand and string attributes.

    Implementations are immutable once built. All coordinate predicates compare intervals only; they do not look at
    sequence names or strands.
    """

    @property
    @abstractmethod
    def seq_name(self) -> str:
        """Name of the sequence this annotation lies on."""

    @property
    @abstractmethod
    def interval(self) -> Interval:
        """Half-open interval of this annotation."""

    @property
    @abstractmethod
    def attributes(self) -> Mapping[str, str]:
        """Read-only attribute mapping."""

    @property
    @abstractmethod
    def strand(self) -> Strand:
        """Strand of this annotation."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Dictionary to build a Model representation."""

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end

    @property
    def span(self) -> int:
        return self.interval.span

    def attribute(self, key: str) -> Optional[str]:
        """Returns the value of the given attribute, or ``None`` if it is not set."""
        return self.attributes.get(key)

    def overlaps(self, other: "AbstractAnnotation") -> bool:
        return self.interval.overlaps(other.interval)

    def envelops(self, other: "AbstractAnnotation") -> bool:
        return self.interval.envelops(other.interval)

    def is_adjacent(self, other: "AbstractAnnotation") -> bool:
        return self.interval.is_adjacent(other.interval)
