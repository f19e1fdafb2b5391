"""
Coordinate Kernel: The source of truth for genomic coordinate systems.

Handles conversion between:
- Variant tables and excluded-position files (1-based, inclusive)
- Internal sequence offsets (0-based), as used when slicing a sequence

Position Keys are always 1-based so that keys built from a random sequence
offset, from a table row and from an excluded-positions range compare equal.
"""

from collections.abc import Iterator

from varbench.models.core import PositionKey


class CoordinateKernel:
    """
    Stateless utility for coordinate transformations.
    """

    @staticmethod
    def offset_to_position(offset: int) -> int:
        """0-based sequence offset -> 1-based table position."""
        return offset + 1

    @staticmethod
    def key_from_offset(chromosome: str, offset: int) -> PositionKey:
        return PositionKey(chromosome, CoordinateKernel.offset_to_position(offset))

    @staticmethod
    def parse_position(token: str) -> int:
        """
        Parse a 1-based position field.

        Raises:
            ValueError: if the token is not a positive integer.
        """
        token = token.strip()
        if not token.isdigit():
            raise ValueError(f"position '{token}' is not numeric")
        position = int(token)
        if position < 1:
            raise ValueError(f"position {position} is not 1-based")
        return position

    @staticmethod
    def expand_range(chromosome: str, start: int, end: int) -> Iterator[PositionKey]:
        """
        Yield every Position Key of a 1-based inclusive range [start, end].
        """
        if end < start:
            raise ValueError(f"End position ({end}) must be >= start position ({start})")
        for position in range(start, end + 1):
            yield PositionKey(chromosome, position)
