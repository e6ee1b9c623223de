"""
Container classes model transcript sub-features, transcripts and genes. Builders validate their inputs and infer
sub-features from exon and coding coordinates.
"""

from inscripta.txcantor.gene.feature import TxFeatureKind, TranscriptFeature, TranscriptFeatureBuilder  # noqa F401
from inscripta.txcantor.gene.inference import infer_features  # noqa F401
from inscripta.txcantor.gene.transcript import Transcript, TranscriptBuilder  # noqa F401
from inscripta.txcantor.gene.gene import Gene, GeneBuilder  # noqa F401
