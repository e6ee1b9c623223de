from enum import Enum
from typing import Optional

from inscripta.txcantor.exc import ConflictingStrandError, StrandCharError, UnspecifiedStrandError


class Strand(Enum):
    FORWARD = 1
    REVERSE = -1
    UNKNOWN = 0

    def __str__(self):
        return self.to_symbol()

    @staticmethod
    def from_symbol(value: str) -> "Strand":
        """Converts string representation of a strand to a Strand"""
        if value == "+":
            return Strand.FORWARD
        if value == "-":
            return Strand.REVERSE
        if value == ".":
            return Strand.UNKNOWN
        raise StrandCharError("{} is not a valid string representation of a strand".format(value))

    def to_symbol(self) -> str:
        if self == Strand.FORWARD:
            return "+"
        if self == Strand.REVERSE:
            return "-"
        return "."

    def reverse(self) -> "Strand":
        """Returns the opposite of this Strand"""
        if self == Strand.FORWARD:
            return Strand.REVERSE
        if self == Strand.REVERSE:
            return Strand.FORWARD
        return Strand.UNKNOWN

    @property
    def is_directional(self) -> bool:
        return self != Strand.UNKNOWN


def resolve_strand(strand: Optional[Strand] = None, strand_char: Optional[str] = None) -> Strand:
    """Resolve the strand of a feature from an explicit Strand, a strand character, or both.

    Args:
        strand: A Strand member.
        strand_char: One of ``+``, ``-`` or ``.``.

    Returns:
        The resolved Strand.

    Raises:
        UnspecifiedStrandError: If neither input is given.
        StrandCharError: If ``strand_char`` cannot be parsed.
        ConflictingStrandError: If both inputs are given and they disagree.
    """
    if strand is None and strand_char is None:
        raise UnspecifiedStrandError("Strand not specified")
    if strand_char is None:
        return strand
    strand_from_char = Strand.from_symbol(strand_char)
    if strand is None:
        return strand_from_char
    if strand != strand_from_char:
        raise ConflictingStrandError(f"Strand {strand.name} conflicts with strand character {strand_char}")
    return strand
