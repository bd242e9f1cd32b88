"""Dense tile grid classified from the world's raster maps."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .models import BiomeID, RegionID


@dataclass(slots=True)
class TileGrid:
    """One region id and one biome id per map cell, stored row-major."""

    width: int
    height: int
    regions: list[list[RegionID]]
    biomes: list[list[BiomeID]]

    def __post_init__(self) -> None:
        for name, rows in (("regions", self.regions), ("biomes", self.biomes)):
            if len(rows) != self.height or any(len(row) != self.width for row in rows):
                raise ValueError(f"{name} layer does not match {self.width}x{self.height}")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def region_at(self, x: int, y: int) -> RegionID:
        if not self.in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.regions[y][x]

    def biome_at(self, x: int, y: int) -> BiomeID:
        if not self.in_bounds(x, y):
            raise IndexError(f"tile ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.biomes[y][x]

    def iter_region_tiles(self) -> Iterator[tuple[int, int, RegionID]]:
        """Yield ``(x, y, region_id)`` for every cell."""

        for y, row in enumerate(self.regions):
            for x, region_id in enumerate(row):
                yield x, y, region_id
