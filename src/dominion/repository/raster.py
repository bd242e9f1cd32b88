"""Pillow-backed raster maps."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from dominion.domain.errors import LoadError
from dominion.interfaces import Colour


class PillowRasterMap:
    """An image decoded once into packed RGB bytes.

    Rows are sliced out of the immutable byte buffer, so concurrent readers
    need no locking.
    """

    def __init__(self, width: int, height: int, data: bytes) -> None:
        if len(data) != width * height * 3:
            raise ValueError(f"expected {width * height * 3} bytes of RGB data, got {len(data)}")
        self._width = width
        self._height = height
        self._data = data

    @classmethod
    def open(cls, path: Path) -> PillowRasterMap:
        try:
            with Image.open(path) as image:
                return cls.from_image(image)
        except OSError as exc:
            raise LoadError(f"cannot read image {path}: {exc}") from exc

    @classmethod
    def from_image(cls, image: Image.Image) -> PillowRasterMap:
        rgb = image if image.mode == "RGB" else image.convert("RGB")
        width, height = rgb.size
        return cls(width, height, rgb.tobytes())

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def row(self, y: int) -> list[Colour]:
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} outside 0..{self._height - 1}")
        start = y * self._width * 3
        chunk = self._data[start : start + self._width * 3]
        return [(chunk[i], chunk[i + 1], chunk[i + 2]) for i in range(0, len(chunk), 3)]
