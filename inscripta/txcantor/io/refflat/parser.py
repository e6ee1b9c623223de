"""
Streaming refFlat reader.

All streams are lazy and pull-based. A row that cannot be decoded, or whose transcript cannot be built, does not end
the stream: the exception is yielded in place of the item at that position and reading continues with the next row.
Callers that want to fail fast can simply raise what they receive::

    with open_refflat("annotation.refFlat") as reader:
        for gene in reader.genes():
            if isinstance(gene, Exception):
                raise gene
            ...
"""
import csv
import logging
from itertools import groupby
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple, Union

from inscripta.txcantor.exc import FeatureError
from inscripta.txcantor.gene.gene import Gene, GeneBuilder
from inscripta.txcantor.gene.transcript import Transcript
from inscripta.txcantor.io.exc import RefFlatDecodeError
from inscripta.txcantor.io.refflat.rows import RefFlatRecord

logger = logging.getLogger(__name__)

RecordResult = Union[RefFlatRecord, RefFlatDecodeError]
TranscriptResult = Union[Transcript, RefFlatDecodeError, FeatureError]
GeneResult = Union[Gene, RefFlatDecodeError, FeatureError]

# (gene ID, sequence name, strand character)
GroupKey = Optional[Tuple[str, str, str]]


class Reader:
    """Reads refFlat rows from an open text handle.

    The handle is only closed by :meth:`close()` if the reader opened it itself through :meth:`from_file()`.
    """

    def __init__(self, handle: TextIO):
        self._handle = handle
        self._owns_handle = False

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Reader":
        """Open ``path`` for reading. The returned reader owns the file handle."""
        reader = cls(open(path, "r", encoding="utf-8", newline=""))
        reader._owns_handle = True
        return reader

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_handle:
            self._handle.close()

    def _numbered_records(self) -> Iterator[Tuple[int, RecordResult]]:
        rows = csv.reader(self._handle, delimiter="\t", quoting=csv.QUOTE_NONE)
        for row in rows:
            if not row:
                continue
            try:
                yield rows.line_num, RefFlatRecord.from_row(row, rows.line_num)
            except RefFlatDecodeError as err:
                logger.info(f"Unable to decode row: {err}")
                yield rows.line_num, err

    def records(self) -> Iterator[RecordResult]:
        """Yields each decoded :class:`~txcantor.io.refflat.rows.RefFlatRecord`, or a
        :class:`~txcantor.io.exc.RefFlatDecodeError` for rows that could not be decoded.
        """
        for _, record in self._numbered_records():
            yield record

    def transcripts(self) -> Iterator[TranscriptResult]:
        """Yields one :class:`~txcantor.gene.transcript.Transcript` per row, or the exception raised while decoding
        the row or building its transcript.
        """
        for line_number, record in self._numbered_records():
            if isinstance(record, RefFlatDecodeError):
                yield record
            else:
                yield _record_to_transcript(record, line_number)

    def genes(self) -> Iterator[GeneResult]:
        """Groups runs of adjacent rows that share a gene ID, sequence name and strand into one
        :class:`~txcantor.gene.gene.Gene`.

        Rows of the same gene that are separated by a row of another gene produce separate genes. A run of rows that
        could not be decoded yields the first decoding error of the run, and a run in which a transcript could not be
        built yields the first such error in place of the gene.
        """
        for key, group in groupby(self._numbered_records(), key=_group_key):
            if key is None:
                _, err = next(group)
                yield err
                continue
            yield _group_to_gene(key, group)


def _group_key(numbered_record: Tuple[int, RecordResult]) -> GroupKey:
    _, record = numbered_record
    if isinstance(record, RefFlatDecodeError):
        return None
    return record.gene_id, record.seq_name, record.strand


def _record_to_transcript(record: RefFlatRecord, line_number: int) -> TranscriptResult:
    try:
        return record.to_transcript()
    except RefFlatDecodeError as err:
        if err.line_number is None:
            err.line_number = line_number
        logger.info(f"Unable to decode transcript: {err}")
        return err
    except FeatureError as err:
        logger.info(f"Unable to build transcript {record.transcript_name} on refFlat line {line_number}: {err}")
        return err


def _group_to_gene(key: Tuple[str, str, str], group: Iterator[Tuple[int, RefFlatRecord]]) -> GeneResult:
    gene_id, seq_name, strand_char = key
    builder = GeneBuilder(seq_name, gene_id=gene_id, strand_char=strand_char)
    for line_number, record in group:
        transcript = _record_to_transcript(record, line_number)
        if isinstance(transcript, Exception):
            # groupby skips the rest of the run
            return transcript
        builder.transcript(transcript, record.transcript_name)
    try:
        gene = builder.build()
    except FeatureError as err:
        logger.info(f"Unable to build gene {gene_id}: {err}")
        return err
    logger.debug(f"Parsed gene {gene_id} with {len(gene)} transcripts")
    return gene


def open_refflat(path_or_handle: Union[str, Path, TextIO]) -> Reader:
    """Open a refFlat file by path, or wrap an already open text handle.

    Returns:
        A :class:`Reader`. It should be closed, or used as a context manager, when given a path.
    """
    if isinstance(path_or_handle, (str, Path)):
        return Reader.from_file(path_or_handle)
    return Reader(path_or_handle)
