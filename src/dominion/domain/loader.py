"""World loading: entity catalogs, colour palettes and tile classification.

Loading runs once per game start.  Pixel classification has no inter-pixel
dependency, so rows are fanned out over a thread pool; the palettes are
built beforehand and only read while the workers run.  Any failure aborts
the load with :class:`~dominion.domain.errors.LoadError`; no partial world
is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from PIL import ImageColor

from .borders import BorderGraph, derive_borders
from .enums import EntityCategory
from .errors import DuplicateEntityError, LoadError
from .models import Army, Biome, Region, Relation, World
from .store import EntityStore
from .tiles import TileGrid

if TYPE_CHECKING:
    from dominion.interfaces import Colour, IRasterMap, IWorldSource

logger = logging.getLogger(__name__)

# Registration order matters: later categories reference earlier ones.
CATEGORY_ORDER: tuple[EntityCategory, ...] = (
    EntityCategory.BIOME,
    EntityCategory.CULTURE,
    EntityCategory.FACTION,
    EntityCategory.REGION,
    EntityCategory.HOLDING,
    EntityCategory.RESOURCE,
    EntityCategory.UNIT,
)


@dataclass(slots=True)
class LoadedWorld:
    """Everything the loader derives from one world definition."""

    store: EntityStore
    tiles: TileGrid
    graph: BorderGraph


def load_world(
    world_id: str,
    source: IWorldSource,
    *,
    max_workers: int | None = None,
) -> LoadedWorld:
    """Read a world definition and build its store, tile grid and border graph."""

    logger.info("loading world %s", world_id)
    try:
        world = source.get_world(world_id)
        catalogs = {
            category: list(source.get_repository(world_id, category).get_all())
            for category in CATEGORY_ORDER
        }
        region_map = source.get_region_map(world_id)
        biome_map = source.get_biome_map(world_id)
    except LoadError:
        raise
    except (OSError, ValueError) as exc:
        raise LoadError(f"world {world_id!r} could not be read: {exc}") from exc

    store = build_store(world, catalogs)
    tiles = classify_tiles(store, region_map, biome_map, max_workers=max_workers)

    for region1_id, region2_id in derive_borders(tiles):
        store.add_border(region1_id, region2_id)
    graph = BorderGraph(store.borders.values())

    logger.info(
        "world %s loaded: %dx%d tiles, %d regions, %d factions, %d borders",
        world.id,
        tiles.width,
        tiles.height,
        len(store.regions),
        len(store.factions),
        len(graph),
    )
    return LoadedWorld(store=store, tiles=tiles, graph=graph)


def build_store(world: World, catalogs: dict[EntityCategory, list[Any]]) -> EntityStore:
    """Register every catalog entry and set up the starting state."""

    store = EntityStore(world)
    adders: dict[EntityCategory, Callable[[Any], None]] = {
        EntityCategory.BIOME: store.add_biome,
        EntityCategory.CULTURE: store.add_culture,
        EntityCategory.FACTION: store.add_faction,
        EntityCategory.REGION: store.add_region,
        EntityCategory.HOLDING: store.add_holding,
        EntityCategory.RESOURCE: store.add_resource,
        EntityCategory.UNIT: store.add_unit,
    }
    try:
        for category in CATEGORY_ORDER:
            for entity in catalogs.get(category, []):
                adders[category](entity)
    except DuplicateEntityError as exc:
        raise LoadError(f"world {world.id!r}: {exc}") from exc

    _check_references(store)
    _initialise_state(store)
    return store


def _check_references(store: EntityStore) -> None:
    problems: list[str] = []
    for faction in store.factions.values():
        if faction.culture_id not in store.cultures:
            problems.append(f"faction {faction.id} has unknown culture {faction.culture_id}")
    for region in store.regions.values():
        for faction_id in (region.faction_id, region.sovereign_faction_id):
            if faction_id not in store.factions:
                problems.append(f"region {region.id} references unknown faction {faction_id}")
    for holding in store.holdings.values():
        if holding.region_id not in store.regions:
            problems.append(f"holding {holding.id} references unknown region {holding.region_id}")
    if problems:
        raise LoadError(f"world {store.world.id!r} is inconsistent: " + "; ".join(problems))


def _initialise_state(store: EntityStore) -> None:
    world = store.world
    for faction in store.factions.values():
        faction.wealth = world.starting_wealth
        faction.alive = True
        for unit in store.units.values():
            store.add_army(Army(faction.id, unit.id, world.starting_troops))
    for source in store.factions:
        for target in store.factions:
            if source != target:
                store.add_relation(Relation(source, target, 0))


# --- raster classification ---------------------------------------------------------


def parse_colour(value: str) -> Colour:
    """Parse a CSS-style colour (``#rrggbb``, ``rgb(...)``, names) into RGB."""

    red, green, blue = ImageColor.getrgb(value)[:3]
    return (red, green, blue)


def build_palette(entities: Iterable[Region | Biome], entity: str) -> dict[Colour, str]:
    """Map each entity's declared colour to its id; colours must be unique."""

    palette: dict[Colour, str] = {}
    for item in entities:
        try:
            colour = parse_colour(item.colour)
        except ValueError as exc:
            raise LoadError(f"{entity} {item.id!r} has invalid colour {item.colour!r}") from exc
        if colour in palette:
            raise DuplicateEntityError(f"{entity} colour", item.colour)
        palette[colour] = item.id
    return palette


def classify_tiles(
    store: EntityStore,
    region_map: IRasterMap,
    biome_map: IRasterMap,
    *,
    max_workers: int | None = None,
) -> TileGrid:
    """Turn both rasters into a dense tile grid of region and biome ids."""

    world = store.world
    width, height = region_map.size
    if tuple(biome_map.size) != (width, height):
        raise LoadError(
            f"world {world.id!r}: region map is {width}x{height} "
            f"but biome map is {biome_map.size[0]}x{biome_map.size[1]}"
        )
    if (world.width, world.height) != (width, height):
        raise LoadError(
            f"world {world.id!r} declares {world.width}x{world.height} "
            f"but its maps are {width}x{height}"
        )

    try:
        region_palette = build_palette(store.regions.values(), "Region")
        biome_palette = build_palette(store.biomes.values(), "Biome")
    except DuplicateEntityError as exc:
        raise LoadError(f"world {world.id!r}: {exc}") from exc

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dominion-tiles") as pool:
        region_rows = list(
            pool.map(partial(_classify_row, region_map, region_palette, "region"), range(height))
        )
        biome_rows = list(
            pool.map(partial(_classify_row, biome_map, biome_palette, "biome"), range(height))
        )

    try:
        return TileGrid(width=width, height=height, regions=region_rows, biomes=biome_rows)
    except ValueError as exc:
        raise LoadError(f"world {world.id!r}: {exc}") from exc


def _classify_row(
    raster: IRasterMap,
    palette: dict[Colour, str],
    layer: str,
    y: int,
) -> list[Any]:
    pixels: Sequence[Colour] = raster.row(y)
    ids: list[Any] = []
    for x, pixel in enumerate(pixels):
        colour = (pixel[0], pixel[1], pixel[2])
        try:
            ids.append(palette[colour])
        except KeyError:
            raise LoadError(
                f"unregistered {layer} colour #{colour[0]:02x}{colour[1]:02x}{colour[2]:02x} "
                f"at ({x}, {y})"
            ) from None
    return ids


# --- world enumeration ------------------------------------------------------------


def list_worlds(source: IWorldSource, *, max_workers: int | None = None) -> list[World]:
    """Read every world definition the source offers, in parallel."""

    def _read(world_id: str) -> World | None:
        try:
            return source.get_world(world_id)
        except (LoadError, OSError, ValueError) as exc:
            logger.warning("skipping unreadable world %s: %s", world_id, exc)
            return None

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dominion-worlds") as pool:
        worlds = [world for world in pool.map(_read, source.list_world_ids()) if world is not None]
    return sorted(worlds, key=lambda world: world.id)
