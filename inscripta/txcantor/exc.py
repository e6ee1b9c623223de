class TxCantorException(Exception):
    """
    Base exception class for TxCantor.
    """

    pass


class FeatureError(TxCantorException):
    """
    Base class for errors raised while building features, transcripts and genes.
    """

    pass


class IntervalError(FeatureError, ValueError):
    """
    Raised when an interval start coordinate is larger than its end coordinate, or either coordinate is negative.
    """

    pass


class StrandCharError(FeatureError, ValueError):
    """
    Raised when a strand character is not one of ``+``, ``-`` or ``.``.
    """

    pass


class ConflictingStrandError(FeatureError):
    """
    Raised when both a Strand and a strand character are given and they disagree.
    """

    pass


class UnspecifiedStrandError(FeatureError):
    """
    Raised when neither a Strand nor a strand character is given.
    """

    pass


class SubFeatureIntervalError(FeatureError):
    """
    Raised when a child interval is not enveloped by, or not consistent with, its parent. This includes malformed
    exon coordinates and exons that do not cover the transcript.
    """

    pass


class IncompleteTranscriptError(FeatureError):
    """
    Raised when a transcript annotation is incomplete, such as a coding region given without exons.
    """

    pass


class InvalidGeneError(FeatureError):
    """
    Raised when the transcripts given to a gene cannot be combined into one gene.
    """

    pass


class MissingTranscriptIdError(InvalidGeneError):
    """
    Raised when a transcript is added to a gene without an identifier.
    """

    pass


class DuplicateTranscriptError(InvalidGeneError):
    """
    Raised when two transcripts of the same gene share an identifier.
    """

    pass


class MismatchedTranscriptError(InvalidGeneError):
    """
    Raised when a transcript is on a different sequence or strand than its gene.
    """

    pass


class EmptyGeneError(InvalidGeneError):
    """
    Raised when a gene has no transcripts and no explicit coordinates to infer its interval from.
    """

    pass
