import pytest

from inscripta.txcantor.exc import (
    DuplicateTranscriptError,
    EmptyGeneError,
    InvalidGeneError,
    MismatchedTranscriptError,
    MissingTranscriptIdError,
    SubFeatureIntervalError,
    UnspecifiedStrandError,
)
from inscripta.txcantor.gene.gene import Gene, GeneBuilder
from inscripta.txcantor.gene.transcript import TranscriptBuilder
from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand


def make_tx(transcript_id, start, end, seq_name="chr1", strand=Strand.REVERSE):
    return TranscriptBuilder(seq_name, start, end, transcript_id=transcript_id, strand=strand).coords(
        [(start, end)]
    ).build()


class TestGeneBuilder:
    def test_build_from_transcripts(self):
        gene = (
            GeneBuilder("chr1")
            .id("SMIM12")
            .strand_char("-")
            .attribute("source", "refFlat")
            .transcript(make_tx("NM_1", 100, 500))
            .transcript(make_tx("NM_2", 50, 400))
            .transcript(make_tx("NM_3", 200, 600))
            .build()
        )
        assert isinstance(gene, Gene)
        assert gene.id == "SMIM12"
        assert gene.seq_name == "chr1"
        assert gene.strand == Strand.REVERSE
        assert gene.interval == Interval(50, 600)
        assert gene.attribute("source") == "refFlat"
        assert list(gene.transcripts) == ["NM_1", "NM_2", "NM_3"]
        assert [tx.id for tx in gene] == ["NM_1", "NM_2", "NM_3"]
        assert len(gene) == 3

    def test_transcript_key_override(self):
        gene = GeneBuilder("chr1", strand=Strand.REVERSE).transcript(make_tx(None, 0, 10), "alias").build()
        assert list(gene.transcripts) == ["alias"]

    def test_transcripts_mapping(self):
        gene = (
            GeneBuilder("chr1", strand=Strand.REVERSE)
            .transcripts({"b": make_tx("b", 0, 10), "a": make_tx("a", 5, 20)})
            .build()
        )
        assert list(gene.transcripts) == ["b", "a"]
        assert gene.interval == Interval(0, 20)

    def test_transcript_coords(self):
        gene = (
            GeneBuilder("chr1", 11873, 14409, gene_id="DDX11L1", strand_char="+")
            .transcript_coords(
                [("NR_046018", (11873, 14409), [(11873, 12227), (12612, 12721), (13220, 14409)], None)]
            )
            .build()
        )
        tx = gene.transcripts["NR_046018"]
        assert tx.strand == Strand.FORWARD
        assert tx.seq_name == "chr1"
        assert [(exon.start, exon.end) for exon in tx.exons] == [(11873, 12227), (12612, 12721), (13220, 14409)]

    def test_explicit_interval(self):
        gene = GeneBuilder("chr1", 0, 1000, strand=Strand.REVERSE).transcript(make_tx("a", 100, 200)).build()
        assert gene.interval == Interval(0, 1000)

    def test_explicit_interval_without_transcripts(self):
        gene = GeneBuilder("chr1", 0, 1000, strand=Strand.REVERSE).build()
        assert len(gene) == 0
        assert gene.interval == Interval(0, 1000)

    def test_partial_interval_is_inferred(self):
        gene = GeneBuilder("chr1", start=0, strand=Strand.REVERSE).transcript(make_tx("a", 100, 200)).build()
        assert gene.interval == Interval(100, 200)

    @pytest.mark.parametrize(
        "builder,exc",
        [
            (GeneBuilder("chr1").transcript(make_tx("a", 0, 10)), UnspecifiedStrandError),
            (GeneBuilder("chr1", strand=Strand.REVERSE).transcript(make_tx(None, 0, 10)), MissingTranscriptIdError),
            (
                GeneBuilder("chr1", strand=Strand.REVERSE).transcripts({"a": make_tx("a", 0, 10)}).transcript(
                    make_tx("a", 5, 15)
                ),
                DuplicateTranscriptError,
            ),
            (
                GeneBuilder("chr1", strand=Strand.FORWARD).transcript(make_tx("a", 0, 10)),
                MismatchedTranscriptError,
            ),
            (
                GeneBuilder("chr2", strand=Strand.REVERSE).transcript(make_tx("a", 0, 10)),
                MismatchedTranscriptError,
            ),
            (GeneBuilder("chr1", strand=Strand.REVERSE), EmptyGeneError),
            (
                GeneBuilder("chr1", 0, 5, strand=Strand.REVERSE).transcript(make_tx("a", 0, 10)),
                SubFeatureIntervalError,
            ),
        ],
    )
    def test_build_errors(self, builder, exc):
        with pytest.raises(exc):
            builder.build()

    @pytest.mark.parametrize(
        "exc", [MissingTranscriptIdError, DuplicateTranscriptError, MismatchedTranscriptError, EmptyGeneError]
    )
    def test_gene_errors_share_base(self, exc):
        assert issubclass(exc, InvalidGeneError)


class TestGene:
    gene = (
        GeneBuilder("chr1", gene_id="g1", strand=Strand.REVERSE)
        .transcript(make_tx("a", 0, 10))
        .transcript(make_tx("b", 5, 20))
        .build()
    )

    def test_equality(self):
        other = (
            GeneBuilder("chr1", gene_id="g1", strand_char="-")
            .transcript(make_tx("a", 0, 10))
            .transcript(make_tx("b", 5, 20))
            .build()
        )
        assert other == self.gene
        assert hash(other) == hash(self.gene)

    def test_transcripts_read_only(self):
        with pytest.raises(TypeError):
            self.gene.transcripts["c"] = make_tx("c", 0, 5)

    def test_to_dict(self):
        d = self.gene.to_dict()
        assert d["gene_id"] == "g1"
        assert (d["start"], d["end"]) == (0, 20)
        assert [tx["transcript_id"] for tx in d["transcripts"]] == ["a", "b"]
