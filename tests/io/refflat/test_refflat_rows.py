import pytest

from inscripta.txcantor.exc import StrandCharError, SubFeatureIntervalError
from inscripta.txcantor.gene.feature import TxFeatureKind
from inscripta.txcantor.io.exc import RefFlatDecodeError, RefFlatError
from inscripta.txcantor.io.refflat.rows import REFFLAT_COLUMNS, RefFlatRecord
from inscripta.txcantor.location.strand import Strand

ddx11l1 = [
    "DDX11L1",
    "NR_046018",
    "chr1",
    "+",
    "11873",
    "14409",
    "14409",
    "14409",
    "3",
    "11873,12612,13220,",
    "12227,12721,14409,",
]

smim12 = [
    "SMIM12",
    "NM_001164824",
    "chr1",
    "-",
    "34850361",
    "34859045",
    "34855698",
    "34855977",
    "3",
    "34850361,34856555,34858839,",
    "34855982,34856739,34859045,",
]


def replace(row, column, value):
    row = list(row)
    row[REFFLAT_COLUMNS.index(column)] = value
    return row


class TestRefFlatRecord:
    def test_from_row(self):
        record = RefFlatRecord.from_row(ddx11l1)
        assert record.gene_id == "DDX11L1"
        assert record.transcript_name == "NR_046018"
        assert record.seq_name == "chr1"
        assert record.strand == "+"
        assert (record.trx_start, record.trx_end) == (11873, 14409)
        assert (record.coding_start, record.coding_end) == (14409, 14409)
        assert record.num_exons == 3
        assert record.coding_coord is None
        assert record.exon_coords() == [(11873, 12227), (12612, 12721), (13220, 14409)]

    def test_str(self):
        assert str(RefFlatRecord.from_row(ddx11l1)) == "\t".join(ddx11l1)

    def test_coding_coord(self):
        assert RefFlatRecord.from_row(smim12).coding_coord == (34855698, 34855977)

    def test_exon_coords_without_trailing_comma(self):
        row = replace(replace(ddx11l1, "exon_starts", "11873,12612,13220"), "exon_ends", "12227,12721,14409")
        record = RefFlatRecord.from_row(row)
        assert record.exon_coords() == [(11873, 12227), (12612, 12721), (13220, 14409)]

    @pytest.mark.parametrize(
        "row",
        [
            ddx11l1[:10],
            ddx11l1 + ["extra"],
            replace(ddx11l1, "trx_start", "abc"),
            replace(ddx11l1, "trx_end", "-1"),
            replace(ddx11l1, "num_exons", "3.5"),
            replace(ddx11l1, "strand", ""),
        ],
    )
    def test_from_row_invalid(self, row):
        with pytest.raises(RefFlatDecodeError):
            RefFlatRecord.from_row(row, line_number=7)

    def test_decode_error_line_number(self):
        with pytest.raises(RefFlatDecodeError) as exc_info:
            RefFlatRecord.from_row(ddx11l1[:3], line_number=7)
        assert exc_info.value.line_number == 7
        assert str(exc_info.value).startswith("refFlat line 7: ")
        assert isinstance(exc_info.value, RefFlatError)

    @pytest.mark.parametrize(
        "row",
        [
            replace(ddx11l1, "num_exons", "2"),
            replace(ddx11l1, "exon_starts", "11873,12612,"),
            replace(ddx11l1, "exon_ends", "12227,12721,x,"),
            replace(ddx11l1, "exon_starts", "11873,12612,²,"),
        ],
    )
    def test_exon_coords_invalid(self, row):
        record = RefFlatRecord.from_row(row)
        with pytest.raises(RefFlatDecodeError):
            record.exon_coords()
        with pytest.raises(RefFlatDecodeError):
            record.to_transcript()

    def test_to_transcript(self):
        tx = RefFlatRecord.from_row(smim12).to_transcript()
        assert tx.id == "NM_001164824"
        assert tx.seq_name == "chr1"
        assert tx.strand == Strand.REVERSE
        assert tx.attribute("gene_id") == "SMIM12"
        assert tx.coding_span() == (34855698, 34855977)
        assert [(f.start, f.end) for f in tx.features_of_kind(TxFeatureKind.STOP_CODON)] == [(34855698, 34855701)]
        assert [(f.start, f.end) for f in tx.features_of_kind(TxFeatureKind.START_CODON)] == [(34855974, 34855977)]

    @pytest.mark.parametrize(
        "row,exc",
        [
            (replace(ddx11l1, "strand", "x"), StrandCharError),
            (replace(ddx11l1, "trx_end", "15000"), SubFeatureIntervalError),
        ],
    )
    def test_to_transcript_invalid(self, row, exc):
        with pytest.raises(exc):
            RefFlatRecord.from_row(row).to_transcript()

    @pytest.mark.parametrize("row", [ddx11l1, smim12])
    def test_from_transcript(self, row):
        tx = RefFlatRecord.from_row(row).to_transcript()
        assert RefFlatRecord.from_transcript(tx).to_row() == RefFlatRecord.from_row(row).to_row()

    def test_from_transcript_overrides(self):
        tx = RefFlatRecord.from_row(ddx11l1).to_transcript()
        record = RefFlatRecord.from_transcript(tx, gene_id="other", transcript_name="name")
        assert record.gene_id == "other"
        assert record.transcript_name == "name"
