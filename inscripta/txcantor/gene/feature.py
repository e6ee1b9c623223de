"""
Transcript sub-features: exons, UTRs, CDS blocks and start/stop codons.
"""
from enum import Enum
from types import MappingProxyType
from typing import Optional, Dict, Mapping, Any

from Bio.SeqFeature import SeqFeature

from inscripta.txcantor.gene.annotation import AbstractAnnotation
from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand, resolve_strand


class TxFeatureKind(str, Enum):
    """Kinds of sub-features a transcript can have. Values are the feature type strings used in GTF."""

    EXON = "exon"
    UTR = "UTR"
    UTR5 = "UTR5"
    UTR3 = "UTR3"
    CDS = "CDS"
    START_CODON = "start_codon"
    STOP_CODON = "stop_codon"
    ANY = "any"


class TranscriptFeature(AbstractAnnotation):
    """A single sub-feature of a transcript."""

    def __init__(
        self,
        kind: TxFeatureKind,
        seq_name: str,
        interval: Interval,
        strand: Strand,
        attributes: Optional[Mapping[str, str]] = None,
    ):
        self._kind = kind
        self._seq_name = seq_name
        self._interval = interval
        self._strand = strand
        self._attributes = MappingProxyType(dict(attributes) if attributes else {})

    def __str__(self):
        return f"TranscriptFeature({self.kind.name}, {self.seq_name}:{self.interval}:{self.strand})"

    def __repr__(self):
        return "<{}>".format(str(self))

    def __eq__(self, other):
        if not isinstance(other, TranscriptFeature):
            return False
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.kind, self.seq_name, self.interval, self.strand))

    @property
    def kind(self) -> TxFeatureKind:
        return self._kind

    @property
    def seq_name(self) -> str:
        return self._seq_name

    @property
    def interval(self) -> Interval:
        return self._interval

    @property
    def strand(self) -> Strand:
        return self._strand

    @property
    def attributes(self) -> Mapping[str, str]:
        return self._attributes

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            kind=self.kind.name,
            seq_name=self.seq_name,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            attributes=dict(self.attributes),
        )

    def to_biopython(self) -> SeqFeature:
        return SeqFeature(
            self.interval.to_biopython(self.strand),
            type=self.kind.value,
            qualifiers={key: [val] for key, val in self.attributes.items()},
        )


class TranscriptFeatureBuilder:
    """Accumulates the inputs of a :class:`TranscriptFeature` and validates them on :meth:`build()`.

    Setters return the builder itself so calls can be chained::

        TranscriptFeatureBuilder("chr1", 10, 20).kind(TxFeatureKind.EXON).strand_char("+").build()
    """

    def __init__(
        self,
        seq_name: str,
        start: int,
        end: int,
        kind: TxFeatureKind = TxFeatureKind.ANY,
        strand: Optional[Strand] = None,
        strand_char: Optional[str] = None,
        attributes: Optional[Mapping[str, str]] = None,
    ):
        self._seq_name = seq_name
        self._start = start
        self._end = end
        self._kind = kind
        self._strand = strand
        self._strand_char = strand_char
        self._attributes = dict(attributes) if attributes else {}

    def kind(self, kind: TxFeatureKind) -> "TranscriptFeatureBuilder":
        self._kind = kind
        return self

    def strand(self, strand: Strand) -> "TranscriptFeatureBuilder":
        self._strand = strand
        return self

    def strand_char(self, strand_char: str) -> "TranscriptFeatureBuilder":
        self._strand_char = strand_char
        return self

    def attribute(self, key: str, value: str) -> "TranscriptFeatureBuilder":
        self._attributes[key] = value
        return self

    def build(self) -> TranscriptFeature:
        """Resolve the interval, then the strand.

        Raises:
            IntervalError: If the coordinates do not form a valid interval.
            FeatureError: If the strand cannot be resolved.
        """
        interval = Interval(self._start, self._end)
        strand = resolve_strand(self._strand, self._strand_char)
        return TranscriptFeature(self._kind, self._seq_name, interval, strand, self._attributes)
