import io

import pytest

from inscripta.txcantor.gene.gene import GeneBuilder
from inscripta.txcantor.gene.transcript import TranscriptBuilder
from inscripta.txcantor.io.exc import RefFlatError
from inscripta.txcantor.io.refflat.parser import open_refflat
from inscripta.txcantor.io.refflat.rows import RefFlatRecord
from inscripta.txcantor.io.refflat.writer import Writer
from inscripta.txcantor.location.strand import Strand

DDX11L1_LINE = "DDX11L1\tNR_046018\tchr1\t+\t11873\t14409\t14409\t14409\t3\t11873,12612,13220,\t12227,12721,14409,\n"
DDX11L1_EXONS = [(11873, 12227), (12612, 12721), (13220, 14409)]


class TestRefFlatWriter:
    def test_write_row(self):
        handle = io.StringIO()
        row = ("DDX11L1", "NR_046018", "chr1", "+", 11873, 14409, 14409, 14409, 3)
        Writer(handle).write_row(row + ("11873,12612,13220,", "12227,12721,14409,"))
        assert handle.getvalue() == DDX11L1_LINE

    @pytest.mark.parametrize(
        "row",
        [
            ("DDX11L1", "NR_046018", "chr1"),
            ("DDX\t11L1", "NR_046018", "chr1", "+", 1, 2, 2, 2, 1, "1,", "2,"),
            ("DDX11L1", "NR_046018\n", "chr1", "+", 1, 2, 2, 2, 1, "1,", "2,"),
        ],
    )
    def test_write_row_invalid(self, row):
        handle = io.StringIO()
        with pytest.raises(RefFlatError):
            Writer(handle).write_row(row)
        assert handle.getvalue() == ""

    def test_write_record(self):
        handle = io.StringIO()
        Writer(handle).write_record(RefFlatRecord.from_row(DDX11L1_LINE.rstrip("\n").split("\t")))
        assert handle.getvalue() == DDX11L1_LINE

    def test_write_transcript(self):
        tx = (
            TranscriptBuilder("chr1", 11873, 14409)
            .strand_char("+")
            .id("NR_046018")
            .attribute("gene_id", "DDX11L1")
            .coords(DDX11L1_EXONS)
            .build()
        )
        handle = io.StringIO()
        Writer(handle).write_transcript(tx)
        assert handle.getvalue() == DDX11L1_LINE

    def test_write_transcript_gene_id_override(self):
        tx = TranscriptBuilder("chr1", 11873, 14409, transcript_id="NR_046018", strand_char="+").coords(
            DDX11L1_EXONS
        ).build()
        handle = io.StringIO()
        writer = Writer(handle)
        writer.write_transcript(tx)
        writer.write_transcript(tx, gene_id="DDX11L1")
        first, second = handle.getvalue().splitlines(keepends=True)
        assert first == "\t" + DDX11L1_LINE[len("DDX11L1\t"):]
        assert second == DDX11L1_LINE

    def test_write_gene(self):
        gene = (
            GeneBuilder("chr1", 11873, 14409, strand_char="+")
            .id("DDX11L1")
            .transcript_coords([("NR_046018", (11873, 14409), DDX11L1_EXONS, None)])
            .build()
        )
        handle = io.StringIO()
        Writer(handle).write_gene(gene)
        assert handle.getvalue() == DDX11L1_LINE

    def test_write_gene_uses_transcript_keys(self):
        tx = TranscriptBuilder("chr1", 0, 10, transcript_id="inner", strand=Strand.REVERSE).coords([(0, 10)]).build()
        gene = GeneBuilder("chr1", gene_id="G1", strand=Strand.REVERSE).transcript(tx, "outer").build()
        handle = io.StringIO()
        Writer(handle).write_gene(gene)
        assert handle.getvalue() == "G1\touter\tchr1\t-\t0\t10\t10\t10\t1\t0,\t10,\n"

    def test_write_gene_without_id(self):
        """A gene without an ID falls back to the gene_id attribute of each transcript."""
        tx = (
            TranscriptBuilder("chr1", 11873, 14409, transcript_id="NR_046018", strand_char="+")
            .attribute("gene_id", "DDX11L1")
            .coords(DDX11L1_EXONS)
            .build()
        )
        gene = GeneBuilder("chr1", strand_char="+").transcript(tx).build()
        handle = io.StringIO()
        Writer(handle).write_gene(gene)
        assert handle.getvalue() == DDX11L1_LINE

    @pytest.mark.parametrize("filename", ["no_cds.refFlat", "with_cds.refFlat", "non_adjacent.refFlat"])
    def test_round_trip_genes(self, test_data_dir, filename):
        """Reading genes and writing them back reproduces the input byte for byte."""
        path = test_data_dir / filename
        with open_refflat(path) as reader:
            genes = list(reader.genes())
        handle = io.StringIO()
        writer = Writer(handle)
        for gene in genes:
            writer.write_gene(gene)
        assert handle.getvalue() == path.read_text()

    @pytest.mark.parametrize("filename", ["no_cds.refFlat", "with_cds.refFlat"])
    def test_round_trip_transcripts(self, test_data_dir, filename):
        path = test_data_dir / filename
        with open_refflat(path) as reader:
            transcripts = list(reader.transcripts())
        handle = io.StringIO()
        writer = Writer(handle)
        for tx in transcripts:
            writer.write_transcript(tx)
        assert handle.getvalue() == path.read_text()

    def test_from_file(self, tmp_path, test_data_dir):
        out_path = tmp_path / "out.refFlat"
        with open_refflat(test_data_dir / "with_cds.refFlat") as reader, Writer.from_file(out_path) as writer:
            for gene in reader.genes():
                writer.write_gene(gene)
        assert out_path.read_text() == (test_data_dir / "with_cds.refFlat").read_text()
