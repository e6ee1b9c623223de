"""
Object representation of Genes. A gene is a named, ordered collection of transcripts on one sequence and strand.
"""
from types import MappingProxyType
from typing import Optional, Dict, Iterable, List, Mapping, Tuple, Any

from inscripta.txcantor.exc import (
    DuplicateTranscriptError,
    EmptyGeneError,
    MismatchedTranscriptError,
    MissingTranscriptIdError,
    SubFeatureIntervalError,
)
from inscripta.txcantor.gene.annotation import AbstractAnnotation
from inscripta.txcantor.gene.inference import Coord
from inscripta.txcantor.gene.transcript import Transcript, TranscriptBuilder
from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand, resolve_strand

# (transcript ID, (transcript start, transcript end), exon coordinates, optional coding coordinates)
TranscriptCoords = Tuple[str, Coord, Iterable[Coord], Optional[Coord]]


class Gene(AbstractAnnotation):
    """A gene and its transcripts. Transcripts are kept in the order they were added, which is the order they are
    serialized in.
    """

    def __init__(
        self,
        seq_name: str,
        interval: Interval,
        strand: Strand,
        transcripts: Mapping[str, Transcript],
        attributes: Optional[Mapping[str, str]] = None,
        gene_id: Optional[str] = None,
    ):
        self._seq_name = seq_name
        self._interval = interval
        self._strand = strand
        self._transcripts = MappingProxyType(dict(transcripts))
        self._attributes = MappingProxyType(dict(attributes) if attributes else {})
        self._id = gene_id

    def __str__(self):
        return f"Gene({self.id}, {self.seq_name}:{self.interval}:{self.strand}, transcripts={list(self.transcripts)})"

    def __repr__(self):
        return "<{}>".format(str(self))

    def __eq__(self, other):
        if not isinstance(other, Gene):
            return False
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.id, self.seq_name, self.interval, self.strand, tuple(self._transcripts.values())))

    def __iter__(self):
        """Iterate over the transcripts of this gene"""
        yield from self._transcripts.values()

    def __len__(self):
        return len(self._transcripts)

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
    def transcripts(self) -> Mapping[str, Transcript]:
        """Read-only, insertion ordered mapping of transcript ID to transcript."""
        return self._transcripts

    def to_dict(self) -> Dict[str, Any]:
        return dict(
            seq_name=self.seq_name,
            start=self.start,
            end=self.end,
            strand=self.strand.name,
            gene_id=self.id,
            attributes=dict(self.attributes),
            transcripts=[
                dict(transcript.to_dict(), transcript_id=transcript_id)
                for transcript_id, transcript in self._transcripts.items()
            ],
        )


class GeneBuilder:
    """Accumulates the inputs of a :class:`Gene` and validates them all at once on :meth:`build()`.

    Transcripts can be added already built, or as coordinates through :meth:`transcript_coords()`. Coordinate
    transcripts are built on the sequence and strand of the gene.

    If ``start`` and ``end`` are not both given, the gene interval is the smallest one enveloping all transcripts.
    """

    def __init__(
        self,
        seq_name: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        gene_id: Optional[str] = None,
        strand: Optional[Strand] = None,
        strand_char: Optional[str] = None,
        attributes: Optional[Mapping[str, str]] = None,
    ):
        self._seq_name = seq_name
        self._start = start
        self._end = end
        self._id = gene_id
        self._strand = strand
        self._strand_char = strand_char
        self._attributes = dict(attributes) if attributes else {}
        # list of pairs, so that duplicates are still visible at build time
        self._transcripts: List[Tuple[Optional[str], Transcript]] = []
        self._transcript_coords: List[TranscriptCoords] = []

    def id(self, gene_id: str) -> "GeneBuilder":
        self._id = gene_id
        return self

    def strand(self, strand: Strand) -> "GeneBuilder":
        self._strand = strand
        return self

    def strand_char(self, strand_char: str) -> "GeneBuilder":
        self._strand_char = strand_char
        return self

    def attribute(self, key: str, value: str) -> "GeneBuilder":
        self._attributes[key] = value
        return self

    def transcript(self, transcript: Transcript, transcript_id: Optional[str] = None) -> "GeneBuilder":
        """Add a built transcript. It is keyed by ``transcript_id`` if given, otherwise by its own ID."""
        self._transcripts.append((transcript_id if transcript_id is not None else transcript.id, transcript))
        return self

    def transcripts(self, transcripts: Mapping[str, Transcript]) -> "GeneBuilder":
        for transcript_id, transcript in transcripts.items():
            self.transcript(transcript, transcript_id)
        return self

    def transcript_coords(self, transcript_coords: Iterable[TranscriptCoords]) -> "GeneBuilder":
        """Add transcripts as ``(transcript_id, (start, end), exon_coords, coding_coord)`` tuples."""
        self._transcript_coords.extend(transcript_coords)
        return self

    def _resolve_transcripts(self, strand: Strand) -> Dict[str, Transcript]:
        built = list(self._transcripts)
        for transcript_id, (start, end), exon_coords, coding_coord in self._transcript_coords:
            transcript = (
                TranscriptBuilder(self._seq_name, start, end, transcript_id=transcript_id, strand=strand)
                .coords(exon_coords, coding_coord)
                .build()
            )
            built.append((transcript_id, transcript))

        transcripts = {}
        for transcript_id, transcript in built:
            if transcript_id is None:
                raise MissingTranscriptIdError(f"{transcript} has no ID")
            if transcript_id in transcripts:
                raise DuplicateTranscriptError(f"Transcript ID {transcript_id} found twice in gene {self._id}")
            if transcript.seq_name != self._seq_name or transcript.strand != strand:
                raise MismatchedTranscriptError(
                    f"{transcript} is not on {self._seq_name}:{strand} like gene {self._id}"
                )
            transcripts[transcript_id] = transcript
        return transcripts

    def _resolve_interval(self, transcripts: Iterable[Transcript], interval: Optional[Interval]) -> Interval:
        if interval is not None:
            for transcript in transcripts:
                if not interval.envelops(transcript.interval):
                    raise SubFeatureIntervalError(f"{transcript} is not enveloped by gene interval {interval}")
            return interval

        bounds: Optional[Coord] = None
        for transcript in transcripts:
            if bounds is None:
                bounds = (transcript.start, transcript.end)
            else:
                bounds = (min(bounds[0], transcript.start), max(bounds[1], transcript.end))
        if bounds is None:
            raise EmptyGeneError(f"Gene {self._id} has no transcripts to infer its interval from")
        return Interval(*bounds)

    def build(self) -> Gene:
        """Resolve the explicit interval if any, the strand, the transcripts and then the final interval, in that
        order.

        Raises:
            FeatureError: The first validation failure. No partially built gene is returned.
        """
        explicit_interval = None
        if self._start is not None and self._end is not None:
            explicit_interval = Interval(self._start, self._end)
        strand = resolve_strand(self._strand, self._strand_char)
        transcripts = self._resolve_transcripts(strand)
        interval = self._resolve_interval(transcripts.values(), explicit_interval)
        return Gene(self._seq_name, interval, strand, transcripts, self._attributes, self._id)
