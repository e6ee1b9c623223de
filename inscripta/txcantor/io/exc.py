"""
I/O exceptions.
"""
from typing import Optional

from inscripta.txcantor.exc import TxCantorException


class TxCantorIOException(TxCantorException):
    pass


class RefFlatError(TxCantorIOException):
    pass


class RefFlatDecodeError(RefFlatError):
    """
    Raised when a refFlat row cannot be decoded: wrong number of columns, a non-numeric or negative coordinate, or an
    exon count that does not match the exon coordinate lists.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number

    def __str__(self):
        if self.line_number is not None:
            return f"refFlat line {self.line_number}: {super().__str__()}"
        return super().__str__()


class InvalidInputError(TxCantorIOException):
    """
    Raised when a data model is given inputs that cannot describe an annotation, such as unequal numbers of exon
    starts and ends.
    """

    pass
