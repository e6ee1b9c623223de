"""
Reading and writing of the refFlat transcript annotation format.
"""
from inscripta.txcantor.io.refflat.rows import REFFLAT_COLUMNS, RefFlatRecord  # noqa F401
from inscripta.txcantor.io.refflat.parser import Reader, open_refflat  # noqa F401
from inscripta.txcantor.io.refflat.writer import Writer  # noqa F401
