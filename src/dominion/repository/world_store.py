"""File-system world definitions.

Each world lives in its own directory::

    <worlds_dir>/<world_id>/
        world.json        world metadata (one object)
        biomes.json       one JSON array per catalog
        cultures.json
        factions.json
        holdings.json
        regions.json
        resources.json
        units.json
        map.png           region raster
        biomes_map.png    biome raster
"""

from __future__ import annotations

from pathlib import Path

from dominion.domain import models as dm
from dominion.domain.enums import EntityCategory
from dominion.domain.errors import LoadError
from dominion.repository.json_store import JsonEntityRepository, read_model
from dominion.repository.raster import PillowRasterMap
from dominion.schemas import ENTITY_SCHEMAS, WorldEntity

WORLD_FILE = "world.json"
REGION_MAP_FILE = "map.png"
BIOME_MAP_FILE = "biomes_map.png"


class FileWorldSource:
    """Serve world definitions from a directory tree."""

    def __init__(self, worlds_dir: Path) -> None:
        self.worlds_dir = worlds_dir

    def _world_dir(self, world_id: str) -> Path:
        path = self.worlds_dir / world_id
        # world ids come from clients; never leave the worlds directory
        if path.resolve().parent != self.worlds_dir.resolve():
            raise LoadError(f"invalid world id {world_id!r}")
        return path

    def list_world_ids(self) -> list[str]:
        if not self.worlds_dir.is_dir():
            return []
        return sorted(
            path.name for path in self.worlds_dir.iterdir() if (path / WORLD_FILE).is_file()
        )

    def get_world(self, world_id: str) -> dm.World:
        return read_model(self._world_dir(world_id) / WORLD_FILE, WorldEntity).to_domain()

    def get_repository(self, world_id: str, category: EntityCategory) -> JsonEntityRepository:
        path = self._world_dir(world_id) / f"{category.value}.json"
        return JsonEntityRepository(path, ENTITY_SCHEMAS[category])

    def get_region_map(self, world_id: str) -> PillowRasterMap:
        return PillowRasterMap.open(self._world_dir(world_id) / REGION_MAP_FILE)

    def get_biome_map(self, world_id: str) -> PillowRasterMap:
        return PillowRasterMap.open(self._world_dir(world_id) / BIOME_MAP_FILE)
