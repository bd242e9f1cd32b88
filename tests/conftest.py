"""Pytest configuration and shared world fixtures.

This adds the `src/` directory to `sys.path` so tests can import the
`dominion` package without requiring an editable install in CI, and offers
in-memory world definitions drawn as ASCII maps: every character of a
layout row is one tile, and each distinct character is one region.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path

import pytest
from PIL import Image

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from dominion.domain import models as dm  # noqa: E402
from dominion.domain.enums import EntityCategory, RegionType  # noqa: E402
from dominion.domain.game import Game, new_game  # noqa: E402
from dominion.domain.rules_config import DEFAULT_RULES, RulesConfig  # noqa: E402

Colour = tuple[int, int, int]

BIOME_COLOUR = "#228b22"


class FakeRasterMap:
    def __init__(self, rows: list[list[Colour]]) -> None:
        self.rows = rows

    @property
    def size(self) -> tuple[int, int]:
        return (len(self.rows[0]) if self.rows else 0, len(self.rows))

    def row(self, y: int) -> list[Colour]:
        return list(self.rows[y])


class ListRepository:
    def __init__(self, items: list[object]) -> None:
        self.items = items

    def get_all(self) -> list[object]:
        return list(self.items)


@dataclass
class WorldDefinition:
    world: dm.World
    catalogs: dict[EntityCategory, list[object]]
    region_map: FakeRasterMap
    biome_map: FakeRasterMap
    layout: list[str] = field(default_factory=list)

    def entities(self, category: EntityCategory) -> list[object]:
        return self.catalogs.setdefault(category, [])


class FakeWorldSource:
    """Serve world definitions held in memory."""

    def __init__(self, *definitions: WorldDefinition) -> None:
        self.definitions = {definition.world.id: definition for definition in definitions}

    def _definition(self, world_id: str) -> WorldDefinition:
        try:
            return self.definitions[world_id]
        except KeyError:
            raise FileNotFoundError(world_id) from None

    def list_world_ids(self) -> list[str]:
        return list(self.definitions)

    def get_world(self, world_id: str) -> dm.World:
        return self._definition(world_id).world

    def get_repository(self, world_id: str, category: EntityCategory) -> ListRepository:
        return ListRepository(self._definition(world_id).entities(category))

    def get_region_map(self, world_id: str) -> FakeRasterMap:
        return self._definition(world_id).region_map

    def get_biome_map(self, world_id: str) -> FakeRasterMap:
        return self._definition(world_id).biome_map


def region_id(char: str) -> dm.RegionID:
    return dm.RegionID(f"reg_{char}")


def region_colour(index: int) -> Colour:
    return (16 + index * 8, 64, 128)


def hex_colour(colour: Colour) -> str:
    return "#{:02x}{:02x}{:02x}".format(*colour)


def build_definition(
    layout: list[str],
    owners: dict[str, str],
    *,
    world_id: str = "test_world",
    capitals: tuple[str, ...] = (),
    extra_factions: tuple[str, ...] = (),
    units: list[dm.Unit] | None = None,
    holdings: list[dm.Holding] | None = None,
    **world_fields: int,
) -> WorldDefinition:
    """Build a world whose region map is drawn by ``layout``.

    ``owners`` maps each layout character to the faction occupying it.
    World figures default to zero income and recruitment, 100 starting
    wealth, 10 starting troops and an attack minimum of 5.
    """

    height = len(layout)
    width = len(layout[0])
    chars = sorted({char for row in layout for char in row})

    faction_ids: list[str] = []
    for char in chars:
        if owners[char] not in faction_ids:
            faction_ids.append(owners[char])
    faction_ids.extend(faction for faction in extra_factions if faction not in faction_ids)

    values = {
        "base_region_income": 0,
        "base_region_recruitment": 0,
        "base_faction_recruitment": 0,
        "min_troops_per_attack": 5,
        "starting_wealth": 100,
        "starting_troops": 10,
        "holding_slots_per_faction": 3,
        "holdings_price": 0,
    }
    values.update(world_fields)
    world = dm.World(
        id=dm.WorldID(world_id),
        name="Test World",
        width=width,
        height=height,
        **values,
    )

    colours = {char: region_colour(index) for index, char in enumerate(chars)}
    regions = [
        dm.Region(
            id=region_id(char),
            name=f"Region {char.upper()}",
            colour=hex_colour(colours[char]),
            faction_id=dm.FactionID(owners[char]),
            sovereign_faction_id=dm.FactionID(owners[char]),
            type=RegionType.CAPITAL if char in capitals else RegionType.ORDINARY,
        )
        for char in chars
    ]
    factions = [
        dm.Faction(
            id=dm.FactionID(faction_id),
            name=faction_id.replace("_", " ").title(),
            colour="#ffffff",
            culture_id=dm.CultureID("common"),
        )
        for faction_id in faction_ids
    ]
    if units is None:
        units = [
            dm.Unit(
                id=dm.UnitID("militia"),
                name="Militia",
                power=1,
                health=1,
                price=1,
                maintenance=0,
            )
        ]

    biome_rgb = (0x22, 0x8B, 0x22)
    return WorldDefinition(
        world=world,
        catalogs={
            EntityCategory.BIOME: [dm.Biome(dm.BiomeID("plains"), "Plains", BIOME_COLOUR)],
            EntityCategory.CULTURE: [dm.Culture(dm.CultureID("common"), "Common")],
            EntityCategory.FACTION: factions,
            EntityCategory.REGION: regions,
            EntityCategory.HOLDING: list(holdings or []),
            EntityCategory.RESOURCE: [],
            EntityCategory.UNIT: list(units),
        },
        region_map=FakeRasterMap([[colours[char] for char in row] for row in layout]),
        biome_map=FakeRasterMap([[biome_rgb] * width for _ in range(height)]),
        layout=list(layout),
    )


def split_layout(width: int, height: int, columns: str) -> list[str]:
    """Vertical bands of equal width, one per character of ``columns``."""

    band = width // len(columns)
    row = "".join(char * band for char in columns)
    row += columns[-1] * (width - len(row))
    return [row] * height


def start_game(
    definition: WorldDefinition,
    player: str,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Game:
    return new_game(
        definition.world.id, dm.FactionID(player), FakeWorldSource(definition), rules=rules
    )


@pytest.fixture
def duel_definition() -> WorldDefinition:
    """Two 5-column regions side by side: ``reg_a`` (north) and ``reg_b`` (south)."""

    return build_definition(split_layout(10, 10, "ab"), {"a": "north", "b": "south"})


@pytest.fixture
def duel_game(duel_definition: WorldDefinition) -> Game:
    return start_game(duel_definition, "north")


def write_world(definition: WorldDefinition, worlds_dir: Path) -> Path:
    """Lay ``definition`` out on disk the way ``FileWorldSource`` reads it."""

    world_dir = worlds_dir / definition.world.id
    world_dir.mkdir(parents=True, exist_ok=True)
    (world_dir / "world.json").write_text(json.dumps(asdict(definition.world)))
    for category in EntityCategory:
        records = [asdict(entity) for entity in definition.entities(category)]
        (world_dir / f"{category.value}.json").write_text(json.dumps(records))

    rasters = (("map.png", definition.region_map), ("biomes_map.png", definition.biome_map))
    for name, raster in rasters:
        width, height = raster.size
        image = Image.new("RGB", (width, height))
        image.putdata([pixel for y in range(height) for pixel in raster.row(y)])
        image.save(world_dir / name)
    return world_dir
