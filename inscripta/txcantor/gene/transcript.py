"""
Object representation of Transcripts.

A transcript owns an ordered tuple of :class:`~txcantor.gene.feature.TranscriptFeature` objects. These are either
given explicitly, or inferred from exon and coding coordinates by :meth:`~txcantor.gene.inference.infer_features()`.
"""
from types import MappingProxyType
from typing import Optional, Dict, Iterable, List, Mapping, Tuple, Any

from Bio.SeqFeature import SeqFeature, CompoundLocation
from methodtools import lru_cache

from inscripta.txcantor.gene.annotation import AbstractAnnotation
from inscripta.txcantor.gene.feature import TranscriptFeature, TxFeatureKind
from inscripta.txcantor.gene.inference import Coord, resolve_transcript_features
from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand, resolve_strand


class Transcript(AbstractAnnotation):
    """One spliced RNA product. Transcripts are constructed through :class:`TranscriptBuilder`, which validates the
    sub-features against the transcript interval.
    """

    def __init__(
        self,
        seq_name: str,
        interval: Interval,
        strand: Strand,
        features: Iterable[TranscriptFeature],
        attributes: Optional[Mapping[str, str]] = None,
        transcript_id: Optional[str] = None,
    ):
        self._seq_name = seq_name
        self._interval = interval
        self._strand = strand
        self._features = tuple(features)
        self._attributes = MappingProxyType(dict(attributes) if attributes else {})
        self._id = transcript_id

    def __str__(self):
        return f"Transcript({self.id}, {self.seq_name}:{self.interval}:{self.strand}, exons={len(self.exons)})"

    def __repr__(self):
        return "<{}>".format(str(self))

    def __eq__(self, other):
        if not isinstance(other, Transcript):
            return False
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.id, self.seq_name, self.interval, self.strand, self._features))

    @property
    def id(self) -> Optional[str]:
        return self._id

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

    @property
    def features(self) -> Tuple[TranscriptFeature, ...]:
        return self._features

    def features_of_kind(self, kind: TxFeatureKind) -> List[TranscriptFeature]:
        """Returns the sub-features of the given kind, in order."""
        return [feature for feature in self._features if feature.kind == kind]

    @property
    def exons(self) -> List[TranscriptFeature]:
        return self.features_of_kind(TxFeatureKind.EXON)

    @lru_cache(maxsize=1)
    def coding_span(self) -> Optional[Coord]:
        """Returns the ``(start, end)`` of the coding region, or ``None`` if this transcript has no CDS.

        The span runs from the lowest CDS start to the highest CDS end, so it includes the stop codon.
        """
        cds = self.features_of_kind(TxFeatureKind.CDS)
        if not cds:
            return None
        return min(feature.start for feature in cds), max(feature.end for feature in cds)

    @property
    def is_coding(self) -> bool:
        return self.coding_span() is not None

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            seq_name=self.seq_name,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            transcript_id=self.id,
            attributes=dict(self.attributes),
            features=[feature.to_dict() for feature in self._features],
        )

    def to_biopython(self) -> SeqFeature:
        """Export as a BioPython ``SeqFeature`` whose location is the exon blocks, in transcription order."""
        blocks = [exon.interval.to_biopython(self.strand) for exon in self.exons]
        if not blocks:
            blocks = [self.interval.to_biopython(self.strand)]
        if self.strand == Strand.REVERSE:
            blocks = blocks[::-1]
        location = blocks[0] if len(blocks) == 1 else CompoundLocation(blocks)
        qualifiers = {key: [val] for key, val in self.attributes.items()}
        return SeqFeature(location, type="mRNA", id=self.id or "<unknown id>", qualifiers=qualifiers)


class TranscriptBuilder:
    """Accumulates the inputs of a :class:`Transcript` and validates them all at once on :meth:`build()`.

    The sub-features are either given precomputed through :meth:`features()`, which is how formats with explicit
    sub-feature rows are handled, or inferred from :meth:`coords()`. Precomputed features win if both are set::

        TranscriptBuilder("chr1", 100, 1000).strand_char("+").coords([(100, 300), (700, 1000)], (200, 900)).build()
    """

    def __init__(
        self,
        seq_name: str,
        start: int,
        end: int,
        transcript_id: Optional[str] = None,
        strand: Optional[Strand] = None,
        strand_char: Optional[str] = None,
        attributes: Optional[Mapping[str, str]] = None,
        features: Optional[Iterable[TranscriptFeature]] = None,
        exon_coords: Optional[Iterable[Coord]] = None,
        coding_coord: Optional[Coord] = None,
    ):
        self._seq_name = seq_name
        self._start = start
        self._end = end
        self._id = transcript_id
        self._strand = strand
        self._strand_char = strand_char
        self._attributes = dict(attributes) if attributes else {}
        self._features = list(features) if features is not None else None
        self._exon_coords = list(exon_coords) if exon_coords is not None else None
        self._coding_coord = coding_coord

    def id(self, transcript_id: str) -> "TranscriptBuilder":
        self._id = transcript_id
        return self

    def strand(self, strand: Strand) -> "TranscriptBuilder":
        self._strand = strand
        return self

    def strand_char(self, strand_char: str) -> "TranscriptBuilder":
        self._strand_char = strand_char
        return self

    def attribute(self, key: str, value: str) -> "TranscriptBuilder":
        self._attributes[key] = value
        return self

    def features(self, features: Iterable[TranscriptFeature]) -> "TranscriptBuilder":
        self._features = list(features)
        return self

    def coords(self, exon_coords: Iterable[Coord], coding_coord: Optional[Coord] = None) -> "TranscriptBuilder":
        """Set the exon ``(start, end)`` pairs, in ascending order, and optionally the coding region."""
        self._exon_coords = list(exon_coords)
        self._coding_coord = coding_coord
        return self

    def build(self) -> Transcript:
        """Resolve the interval, the strand and then the sub-features, in that order.

        Raises:
            FeatureError: The first validation failure. No partially built transcript is returned.
        """
        interval = Interval(self._start, self._end)
        strand = resolve_strand(self._strand, self._strand_char)
        features = resolve_transcript_features(
            self._seq_name,
            interval,
            strand,
            features=self._features,
            exon_coords=self._exon_coords,
            coding_coord=self._coding_coord,
        )
        return Transcript(self._seq_name, interval, strand, features, self._attributes, self._id)
