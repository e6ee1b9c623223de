"""
Write transcripts and genes as refFlat rows. Each row is printed as one tab-separated, newline terminated line.
"""
from pathlib import Path
from typing import Optional, TextIO, Union

from inscripta.txcantor.gene.gene import Gene
from inscripta.txcantor.gene.transcript import Transcript
from inscripta.txcantor.io.exc import RefFlatError
from inscripta.txcantor.io.refflat.rows import REFFLAT_COLUMNS, RefFlatRecord, RefFlatRow


class Writer:
    """Writes refFlat rows to an open text handle.

    As with :class:`~txcantor.io.refflat.parser.Reader`, the handle is only closed if it was opened through
    :meth:`from_file()`.
    """

    def __init__(self, handle: TextIO):
        self._handle = handle
        self._owns_handle = False

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Writer":
        writer = cls(open(path, "w", encoding="utf-8", newline=""))
        writer._owns_handle = True
        return writer

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_handle:
            self._handle.close()

    def write_row(self, row: RefFlatRow):
        """Write a raw row of 11 columns.

        Raises:
            RefFlatError: If the row does not have 11 columns, or a column contains a tab or a newline.
        """
        if len(row) != len(REFFLAT_COLUMNS):
            raise RefFlatError(f"Expected {len(REFFLAT_COLUMNS)} columns, found {len(row)}")
        columns = [str(col) for col in row]
        for col in columns:
            if "\t" in col or "\n" in col:
                raise RefFlatError(f"Column '{col}' cannot be written to refFlat")
        print("\t".join(columns), file=self._handle)

    def write_record(self, record: RefFlatRecord):
        self.write_row(record.to_row())

    def write_transcript(self, transcript: Transcript, gene_id: Optional[str] = None):
        """Write one transcript.

        Args:
            transcript: Transcript to write.
            gene_id: Gene ID column. Defaults to the ``gene_id`` attribute of the transcript, if any.
        """
        self.write_record(RefFlatRecord.from_transcript(transcript, gene_id=gene_id))

    def write_gene(self, gene: Gene):
        """Write every transcript of ``gene``, in order. The transcript name column is the key the transcript is
        stored under in the gene. The gene ID column is the gene ID, or the ``gene_id`` attribute of each transcript
        if the gene has no ID.
        """
        for transcript_id, transcript in gene.transcripts.items():
            self.write_record(RefFlatRecord.from_transcript(transcript, gene_id=gene.id, transcript_name=transcript_id))
