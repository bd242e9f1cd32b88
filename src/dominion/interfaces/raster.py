"""Raster Map Protocol Interface."""

from collections.abc import Sequence
from typing import Protocol

Colour = tuple[int, int, int]


class IRasterMap(Protocol):
    """Protocol for a pixel-addressable image.

    Rows are read independently so callers may classify them in parallel.
    """

    @property
    def size(self) -> tuple[int, int]:
        """Return ``(width, height)`` in pixels."""
        ...

    def row(self, y: int) -> Sequence[Colour]:
        """Return the RGB colour of every pixel on row ``y``, left to right."""
        ...
