"""Repository Protocol Interfaces.

This module defines the fetch-only contracts the world loader consumes.
World definitions are an external format; the kernel only relies on the
logical shape returned here.
"""

from typing import Protocol, TypeVar

from dominion.domain import models as dm
from dominion.domain.enums import EntityCategory
from dominion.interfaces.raster import IRasterMap

T_co = TypeVar("T_co", covariant=True)


class IEntityRepository(Protocol[T_co]):
    """Protocol for a catalog of one entity category."""

    def get_all(self) -> list[T_co]:
        """Return every entity of the category.

        Raises:
            LoadError: If the backing data is missing or malformed
        """
        ...


class IWorldSource(Protocol):
    """Protocol for a collection of world definitions.

    A world definition bundles the world metadata, one repository per entity
    category and two raster maps (regions and biomes).
    """

    def list_world_ids(self) -> list[str]:
        """Return the identifiers of every world the source can provide."""
        ...

    def get_world(self, world_id: str) -> dm.World:
        """Return the world metadata.

        Raises:
            LoadError: If the world definition is missing or malformed
        """
        ...

    def get_repository(self, world_id: str, category: EntityCategory) -> IEntityRepository[object]:
        """Return the repository holding the given catalog of a world."""
        ...

    def get_region_map(self, world_id: str) -> IRasterMap:
        """Return the raster whose colours identify regions."""
        ...

    def get_biome_map(self, world_id: str) -> IRasterMap:
        """Return the raster whose colours identify biomes."""
        ...
