"""
Data models. These models allow for validation of inputs to a TxCantor model, acting as a JSON schema for serializing
and deserializing the models.

:class:`TranscriptModel` is also the entry point for formats that carry explicit sub-feature rows (GTF and friends):
a transcript given with ``features`` keeps them verbatim, while one given with exon and coding coordinates has its
sub-features inferred.
"""
from typing import List, Optional, ClassVar, Type, Dict

from marshmallow import Schema  # noqa: F401
from marshmallow_dataclass import dataclass

from inscripta.txcantor.gene.feature import TranscriptFeature, TranscriptFeatureBuilder, TxFeatureKind
from inscripta.txcantor.gene.gene import Gene, GeneBuilder
from inscripta.txcantor.gene.transcript import Transcript, TranscriptBuilder
from inscripta.txcantor.io.exc import InvalidInputError
from inscripta.txcantor.location.strand import Strand


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True


@dataclass
class TranscriptFeatureModel(BaseModel):
    """Data model that allows construction of a :class:`~txcantor.gene.feature.TranscriptFeature` object."""

    kind: TxFeatureKind
    start: int
    end: int
    strand: Strand
    seq_name: str
    attributes: Optional[Dict[str, str]] = None

    def to_transcript_feature(self) -> TranscriptFeature:
        return TranscriptFeatureBuilder(
            self.seq_name, self.start, self.end, kind=self.kind, strand=self.strand, attributes=self.attributes
        ).build()

    @staticmethod
    def from_transcript_feature(feature: TranscriptFeature) -> "TranscriptFeatureModel":
        """Convert a :class:`~txcantor.gene.feature.TranscriptFeature` to a :class:`TranscriptFeatureModel`"""
        return TranscriptFeatureModel.Schema().load(feature.to_dict())


@dataclass
class TranscriptModel(BaseModel):
    """Data model that allows construction of a :class:`~txcantor.gene.transcript.Transcript` object.

    Either ``features`` or ``exon_starts``/``exon_ends`` must be given. ``coding_start``/``coding_end`` are only
    considered together with exons.
    """

    seq_name: str
    start: int
    end: int
    strand: Strand
    transcript_id: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None
    features: Optional[List[TranscriptFeatureModel]] = None
    exon_starts: Optional[List[int]] = None
    exon_ends: Optional[List[int]] = None
    coding_start: Optional[int] = None
    coding_end: Optional[int] = None

    def to_transcript(self) -> Transcript:
        """Construct a :class:`~txcantor.gene.transcript.Transcript` from a :class:`TranscriptModel`.

        Raises:
            InvalidInputError: If the exon or coding columns are only partially given.
            FeatureError: If the transcript fails validation.
        """
        builder = TranscriptBuilder(
            self.seq_name,
            self.start,
            self.end,
            transcript_id=self.transcript_id,
            strand=self.strand,
            attributes=self.attributes,
        )
        if self.features is not None:
            builder.features(feature.to_transcript_feature() for feature in self.features)
        elif self.exon_starts is not None or self.exon_ends is not None:
            if self.exon_starts is None or self.exon_ends is None:
                raise InvalidInputError("If exon starts are defined, exon ends must be defined, and vice versa")
            elif len(self.exon_starts) != len(self.exon_ends):
                raise InvalidInputError("Number of exon starts does not match number of exon ends")
            elif (self.coding_start is None) != (self.coding_end is None):
                raise InvalidInputError("If coding start is defined, coding end must be defined, and vice versa")
            coding_coord = (self.coding_start, self.coding_end) if self.coding_start is not None else None
            builder.coords(zip(self.exon_starts, self.exon_ends), coding_coord)
        return builder.build()

    @staticmethod
    def from_transcript(transcript: Transcript) -> "TranscriptModel":
        """Convert a :class:`~txcantor.gene.transcript.Transcript` to a :class:`TranscriptModel`. The sub-features
        are carried over explicitly."""
        return TranscriptModel.Schema().load(transcript.to_dict())


@dataclass
class GeneModel(BaseModel):
    """
    Data model that allows construction of a :class:`~txcantor.gene.gene.Gene` object.

    This is a container for one or more :class:`TranscriptModel` objects. If ``start`` and ``end`` are not given,
    they are inferred from the transcripts.
    """

    seq_name: str
    strand: Strand
    transcripts: List[TranscriptModel]
    gene_id: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    attributes: Optional[Dict[str, str]] = None

    def to_gene(self) -> Gene:
        """Produce a :class:`~txcantor.gene.gene.Gene` from a :class:`GeneModel`."""
        builder = GeneBuilder(
            self.seq_name, self.start, self.end, gene_id=self.gene_id, strand=self.strand, attributes=self.attributes
        )
        for transcript in self.transcripts:
            builder.transcript(transcript.to_transcript())
        return builder.build()

    @staticmethod
    def from_gene(gene: Gene) -> "GeneModel":
        return GeneModel.Schema().load(gene.to_dict())
