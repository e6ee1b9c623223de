"""
:class:`Interval` objects are half-open ``[start, end)`` ranges; :class:`Strand` is the orientation of a feature.
"""

from inscripta.txcantor.location.strand import Strand, resolve_strand  # noqa F401
from inscripta.txcantor.location.interval import Interval  # noqa F401
