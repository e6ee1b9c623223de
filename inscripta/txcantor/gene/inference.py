"""
Infer the sub-features of a transcript from its exon coordinates and an optional coding region.

Formats such as refFlat only carry exon blocks plus a single coding start/end pair. From these, the full sub-feature
layout is derived: one ``EXON`` per block, UTRs outside of the coding region, ``CDS`` blocks inside of it, and the
start and stop codons at its boundaries. Codons may be split across an exon boundary, in which case they are emitted
as more than one sub-feature.

The coding region of a refFlat record includes the stop codon, so the stop codon is always the last three coding bases
on the 3' side (relative to the genome) for forward strand transcripts and the first three for reverse strand ones.
"""
from typing import List, Optional, Sequence, Tuple

from inscripta.txcantor.exc import IncompleteTranscriptError, SubFeatureIntervalError
from inscripta.txcantor.gene.feature import TranscriptFeature, TxFeatureKind
from inscripta.txcantor.location.interval import Interval
from inscripta.txcantor.location.strand import Strand

Coord = Tuple[int, int]

CODON_SIZE = 3

# UTR kind and codon kind on the low coordinate side and the high coordinate side of the coding region, per strand
_BOUNDARY_KINDS = {
    Strand.FORWARD: (
        (TxFeatureKind.UTR5, TxFeatureKind.START_CODON),
        (TxFeatureKind.UTR3, TxFeatureKind.STOP_CODON),
    ),
    Strand.REVERSE: (
        (TxFeatureKind.UTR3, TxFeatureKind.STOP_CODON),
        (TxFeatureKind.UTR5, TxFeatureKind.START_CODON),
    ),
    Strand.UNKNOWN: (
        (TxFeatureKind.UTR, None),
        (TxFeatureKind.UTR, None),
    ),
}


def validate_exon_span(exon_span: Coord, transcript_interval: Interval):
    """Raises ``SubFeatureIntervalError`` unless the ``(min start, max end)`` of the exons equals the transcript."""
    if exon_span != (transcript_interval.start, transcript_interval.end):
        raise SubFeatureIntervalError(
            f"Exons span {exon_span[0]}-{exon_span[1]} but the transcript interval is {transcript_interval}"
        )


def validate_exon_coords(exon_coords: Sequence[Coord], transcript_interval: Interval) -> List[Coord]:
    """Check that exon coordinates are well formed and exactly span the transcript. The exons may be in any order.

    Args:
        exon_coords: ``(start, end)`` pairs.
        transcript_interval: Interval of the transcript that owns the exons.

    Returns:
        The exon coordinates as a list of tuples, in input order.

    Raises:
        IncompleteTranscriptError: If there are no exons.
        SubFeatureIntervalError: If an exon is empty or inverted, or if the exons do not span the transcript
            interval.
    """
    exons = [(start, end) for start, end in exon_coords]
    if not exons:
        raise IncompleteTranscriptError("Transcript has no exons")
    for start, end in exons:
        if start >= end:
            raise SubFeatureIntervalError(f"Exon ({start}, {end}) has no positive length")
    validate_exon_span((min(start for start, _ in exons), max(end for _, end in exons)), transcript_interval)
    return exons


def _validate_exon_order(exons: Sequence[Coord]):
    prev_end = None
    for start, end in exons:
        if prev_end is not None and start < prev_end:
            raise SubFeatureIntervalError(f"Exon ({start}, {end}) overlaps or precedes the exon ending at {prev_end}")
        prev_end = end


def infer_features(
    seq_name: str,
    transcript_interval: Interval,
    strand: Strand,
    exon_coords: Sequence[Coord],
    coding_coord: Optional[Coord] = None,
) -> List[TranscriptFeature]:
    """Infer the ordered sub-features of a transcript.

    Without a coding region (``coding_coord`` is ``None`` or has equal start and end) one ``EXON`` feature is produced
    per exon, in input order. Otherwise every exon is followed by the UTR, codon and CDS features that fall within it.

    When the coding region ends fewer bases into an exon than the codon on that side still needs, the missing bases
    are taken from the end of the previous coding block and emitted before that exon. This also applies when the
    coding region ends exactly at the end of a short final coding exon, so both codons always carry three bases
    unless a coding boundary falls in an intron.

    Args:
        seq_name: Sequence name given to every sub-feature.
        transcript_interval: Interval of the transcript; the exons must span it exactly.
        strand: Strand of the transcript. Determines which side carries the start codon. Transcripts with an
            unknown strand get ``UTR`` features on both sides and no codons.
        exon_coords: ``(start, end)`` exon pairs. With a coding region they must be ascending and non-overlapping.
        coding_coord: Optional ``(start, end)`` pair of the coding region, stop codon included.

    Returns:
        A list of :class:`~txcantor.gene.feature.TranscriptFeature`, ordered by exon.

    Raises:
        IncompleteTranscriptError: If there are no exons.
        SubFeatureIntervalError: If the exons or the coding region are inconsistent with each other or with the
            transcript interval.
    """
    exons = validate_exon_coords(exon_coords, transcript_interval)

    def make_feature(kind: TxFeatureKind, start: int, end: int) -> TranscriptFeature:
        return TranscriptFeature(kind, seq_name, Interval(start, end), strand)

    if coding_coord is None or coding_coord[0] == coding_coord[1]:
        return [make_feature(TxFeatureKind.EXON, start, end) for start, end in exons]

    coding_start, coding_end = coding_coord
    if coding_start > coding_end:
        raise SubFeatureIntervalError(f"Coding start {coding_start} is larger than coding end {coding_end}")
    if coding_start < transcript_interval.start or coding_end > transcript_interval.end:
        raise SubFeatureIntervalError(
            f"Coding region {coding_start}-{coding_end} is not enveloped by the exons of {transcript_interval}"
        )
    _validate_exon_order(exons)

    (utr_low, codon_low), (utr_high, codon_high) = _BOUNDARY_KINDS[strand]
    # bases of each codon that still have to be placed
    codon_low_remaining = codon_high_remaining = CODON_SIZE
    # coding block of the previous exon, used to complete a codon that ends in the previous exon
    prev_cds: Optional[Coord] = None

    features = []
    for start, end in exons:
        if end <= coding_start:
            features.append(make_feature(TxFeatureKind.EXON, start, end))
            features.append(make_feature(utr_low, start, end))
            continue
        if start >= coding_end:
            features.append(make_feature(TxFeatureKind.EXON, start, end))
            features.append(make_feature(utr_high, start, end))
            continue

        cds_start, cds_end = max(start, coding_start), min(end, coding_end)
        has_coding_end = coding_end <= end

        # the coding region ends too close to the start of this exon for the whole codon to fit, so its first
        # bases are at the end of the previous coding block
        if has_coding_end and codon_high and prev_cds and coding_end - cds_start < codon_high_remaining:
            missing = codon_high_remaining - (coding_end - cds_start)
            codon = make_feature(codon_high, max(prev_cds[0], prev_cds[1] - missing), prev_cds[1])
            codon_high_remaining -= codon.span
            features.append(codon)

        features.append(make_feature(TxFeatureKind.EXON, start, end))
        if start < coding_start:
            features.append(make_feature(utr_low, start, coding_start))
        if codon_low and codon_low_remaining > 0:
            codon = make_feature(codon_low, cds_start, min(cds_start + codon_low_remaining, cds_end))
            codon_low_remaining -= codon.span
            features.append(codon)
        features.append(make_feature(TxFeatureKind.CDS, cds_start, cds_end))
        if has_coding_end:
            if codon_high and codon_high_remaining > 0:
                codon = make_feature(codon_high, max(cds_start, coding_end - codon_high_remaining), coding_end)
                codon_high_remaining -= codon.span
                features.append(codon)
            if coding_end < end:
                features.append(make_feature(utr_high, coding_end, end))
        prev_cds = (cds_start, cds_end)

    return features


def resolve_transcript_features(
    seq_name: str,
    transcript_interval: Interval,
    strand: Strand,
    features: Optional[Sequence[TranscriptFeature]] = None,
    exon_coords: Optional[Sequence[Coord]] = None,
    coding_coord: Optional[Coord] = None,
) -> List[TranscriptFeature]:
    """Pick the sub-features of a transcript from whichever input was given.

    Precomputed features take precedence and are used verbatim, which supports formats that carry explicit sub-feature
    rows. Otherwise the features are inferred from the exon and coding coordinates.

    Raises:
        IncompleteTranscriptError: If neither features nor exons were given.
        SubFeatureIntervalError: If a precomputed feature lies outside of the transcript, if the precomputed ``EXON``
            features do not span the transcript, or the coordinates are inconsistent.
    """
    if features is not None:
        features = list(features)
        for feature in features:
            if not transcript_interval.envelops(feature.interval):
                raise SubFeatureIntervalError(f"{feature} is not enveloped by transcript {transcript_interval}")
        exons = [feature for feature in features if feature.kind == TxFeatureKind.EXON]
        if not exons:
            raise SubFeatureIntervalError(f"No exon features cover transcript {transcript_interval}")
        validate_exon_span((min(exon.start for exon in exons), max(exon.end for exon in exons)), transcript_interval)
        return features
    if exon_coords is None:
        if coding_coord is not None:
            raise IncompleteTranscriptError("Coding region given without exons")
        raise IncompleteTranscriptError("Transcript has neither features nor exons")
    return infer_features(seq_name, transcript_interval, strand, exon_coords, coding_coord)
