"""
refFlat is a transcript-oriented format with one transcript per line. It is used most prominently by the Picard suite
of tools. The 11 tab-separated columns are:

1. ``gene_id``: Gene name.
2. ``transcript_name``: Transcript name.
3. ``seq_name``: Sequence (chromosome) name.
4. ``strand``: Any of ``[+, -, .]``.
5. ``trx_start``: 0-based transcript start.
6. ``trx_end``: 0-based exclusive transcript end.
7. ``coding_start``: Coding region start. Equal to ``coding_end`` for non-coding transcripts.
8. ``coding_end``: Coding region end, stop codon included.
9. ``num_exons``: Number of exons.
10. ``exon_starts``: Comma separated exon starts, with a trailing comma.
11. ``exon_ends``: Comma separated exon ends, with a trailing comma.

There is no header and no quoting.
"""
from dataclasses import field
from typing import List, Optional, Sequence, Tuple, ClassVar, Type

from marshmallow import Schema, ValidationError, validate  # noqa: F401
from marshmallow_dataclass import dataclass

from inscripta.txcantor.gene.inference import Coord
from inscripta.txcantor.gene.transcript import Transcript, TranscriptBuilder
from inscripta.txcantor.io.exc import RefFlatDecodeError

REFFLAT_COLUMNS = (
    "gene_id",
    "transcript_name",
    "seq_name",
    "strand",
    "trx_start",
    "trx_end",
    "coding_start",
    "coding_end",
    "num_exons",
    "exon_starts",
    "exon_ends",
)

GENE_ID_ATTRIBUTE = "gene_id"

RefFlatRow = Tuple[str, str, str, str, int, int, int, int, int, str, str]


def _coordinate():
    return field(metadata={"validate": validate.Range(min=0)})


@dataclass
class RefFlatRecord:
    """One decoded refFlat row. Coordinates are validated to be non-negative integers, but the exon lists are kept
    as their raw strings until :meth:`to_transcript()` is called.
    """

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    gene_id: str
    transcript_name: str
    seq_name: str
    strand: str = field(metadata={"validate": validate.Length(equal=1)})
    trx_start: int = _coordinate()
    trx_end: int = _coordinate()
    coding_start: int = _coordinate()
    coding_end: int = _coordinate()
    num_exons: int = _coordinate()
    exon_starts: str = field(default="")
    exon_ends: str = field(default="")

    class Meta:
        ordered = True

    def __str__(self):
        return "\t".join(str(col) for col in self.to_row())

    @staticmethod
    def from_row(row: Sequence[str], line_number: Optional[int] = None) -> "RefFlatRecord":
        """Decode a row of raw string columns.

        Args:
            row: The 11 columns of a refFlat line.
            line_number: Line number of the row, used in error messages.

        Raises:
            RefFlatDecodeError: If the number of columns is wrong or a numeric column is invalid.
        """
        if len(row) != len(REFFLAT_COLUMNS):
            raise RefFlatDecodeError(f"Expected {len(REFFLAT_COLUMNS)} columns, found {len(row)}", line_number)
        try:
            return RefFlatRecord.Schema().load(dict(zip(REFFLAT_COLUMNS, row)))
        except ValidationError as err:
            raise RefFlatDecodeError(f"Invalid columns {err.messages}", line_number) from err

    @staticmethod
    def from_transcript(
        transcript: Transcript, gene_id: Optional[str] = None, transcript_name: Optional[str] = None
    ) -> "RefFlatRecord":
        """Encode a transcript as a refFlat record.

        Args:
            transcript: Transcript to encode. Exon columns come from its ``EXON`` sub-features.
            gene_id: Gene ID to use. Defaults to the ``gene_id`` attribute of the transcript, or an empty string.
            transcript_name: Transcript name to use. Defaults to the transcript ID, or an empty string.

        Returns:
            A :class:`RefFlatRecord`. Non-coding transcripts have both coding columns set to the transcript end.
        """
        if gene_id is None:
            gene_id = transcript.attribute(GENE_ID_ATTRIBUTE) or ""
        if transcript_name is None:
            transcript_name = transcript.id or ""
        coding_start, coding_end = transcript.coding_span() or (transcript.end, transcript.end)
        exons = transcript.exons
        return RefFlatRecord(
            gene_id=gene_id,
            transcript_name=transcript_name,
            seq_name=transcript.seq_name,
            strand=transcript.strand.to_symbol(),
            trx_start=transcript.start,
            trx_end=transcript.end,
            coding_start=coding_start,
            coding_end=coding_end,
            num_exons=len(exons),
            exon_starts="".join(f"{exon.start}," for exon in exons),
            exon_ends="".join(f"{exon.end}," for exon in exons),
        )

    def to_row(self) -> RefFlatRow:
        return (
            self.gene_id,
            self.transcript_name,
            self.seq_name,
            self.strand,
            self.trx_start,
            self.trx_end,
            self.coding_start,
            self.coding_end,
            self.num_exons,
            self.exon_starts,
            self.exon_ends,
        )

    @property
    def coding_coord(self) -> Optional[Coord]:
        """Returns the coding region, or ``None`` if coding start equals coding end."""
        if self.coding_start == self.coding_end:
            return None
        return self.coding_start, self.coding_end

    def exon_coords(self) -> List[Coord]:
        """Zip the exon start and end columns into ``(start, end)`` pairs.

        Raises:
            RefFlatDecodeError: If an exon coordinate is not a non-negative integer, or if the number of starts, ends
                and ``num_exons`` disagree.
        """
        starts = _parse_coordinate_list(self.exon_starts, "exon_starts")
        ends = _parse_coordinate_list(self.exon_ends, "exon_ends")
        if not len(starts) == len(ends) == self.num_exons:
            raise RefFlatDecodeError(
                f"Transcript {self.transcript_name} has {self.num_exons} exons but {len(starts)} exon starts "
                f"and {len(ends)} exon ends"
            )
        return list(zip(starts, ends))

    def to_transcript(self) -> Transcript:
        """Build a :class:`~txcantor.gene.transcript.Transcript` from this record. The gene ID is stored as the
        ``gene_id`` attribute of the transcript.

        Raises:
            RefFlatDecodeError: If the exon columns cannot be decoded.
            FeatureError: If the transcript fails validation.
        """
        return (
            TranscriptBuilder(self.seq_name, self.trx_start, self.trx_end)
            .id(self.transcript_name)
            .strand_char(self.strand)
            .coords(self.exon_coords(), self.coding_coord)
            .attribute(GENE_ID_ATTRIBUTE, self.gene_id)
            .build()
        )


def _parse_coordinate_list(value: str, column: str) -> List[int]:
    value = value.strip(",")
    if not value:
        return []
    coords = []
    for item in value.split(","):
        if not (item.isascii() and item.isdigit()):
            raise RefFlatDecodeError(f"Column {column} has an invalid coordinate '{item}'")
        coords.append(int(item))
    return coords
