"""Dataclasses describing every Dominion world entity.

Catalog entries (biomes, cultures, factions, holdings, regions, resources,
units) are keyed by their string identifier.  Cross-entity records (armies,
borders, relations) are keyed by identifier pairs and live in
:class:`~dominion.domain.store.EntityStore`.

The rules layer only ever touches these types; persistence adapters translate
to and from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from .enums import HoldingType, RegionType, UnitType

# --- Strongly typed identifiers -------------------------------------------------

WorldID = NewType("WorldID", str)
BiomeID = NewType("BiomeID", str)
CultureID = NewType("CultureID", str)
FactionID = NewType("FactionID", str)
HoldingID = NewType("HoldingID", str)
RegionID = NewType("RegionID", str)
ResourceID = NewType("ResourceID", str)
UnitID = NewType("UnitID", str)

ArmyKey = tuple[FactionID, UnitID]
BorderKey = tuple[RegionID, RegionID]
RelationKey = tuple[FactionID, FactionID]


def border_key(region1_id: RegionID, region2_id: RegionID) -> BorderKey:
    """Return the canonical (unordered) key of a border between two regions."""

    if region1_id <= region2_id:
        return (region1_id, region2_id)
    return (region2_id, region1_id)


# --- Catalog dataclasses --------------------------------------------------------


@dataclass(slots=True)
class Biome:
    """Terrain kind painted on the biome map."""

    id: BiomeID
    name: str
    colour: str
    description: str = ""


@dataclass(slots=True)
class Culture:
    """Culture a faction belongs to."""

    id: CultureID
    name: str
    description: str = ""
    place_names: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Faction:
    """Playable or AI-controlled polity."""

    id: FactionID
    name: str
    colour: str
    culture_id: CultureID
    wealth: int = 0
    alive: bool = True
    description: str = ""


@dataclass(slots=True)
class Region:
    """Atomic unit of territory.

    ``faction_id`` is the current occupier and drives income and recruitment;
    ``sovereign_faction_id`` records the rightful owner and never changes on
    conquest.
    """

    id: RegionID
    name: str
    colour: str
    faction_id: FactionID
    sovereign_faction_id: FactionID
    type: RegionType = RegionType.ORDINARY
    description: str = ""


@dataclass(slots=True)
class Holding:
    """Developed site (or free slot) inside a region."""

    id: HoldingID
    name: str
    region_id: RegionID
    type: HoldingType = HoldingType.EMPTY
    description: str = ""


@dataclass(slots=True)
class Resource:
    """Natural resource catalog entry."""

    id: ResourceID
    name: str
    description: str = ""


@dataclass(slots=True)
class Unit:
    """Troop template; not owned by any faction."""

    id: UnitID
    name: str
    power: int
    health: int
    price: int
    maintenance: int
    type: UnitType = UnitType.INFANTRY
    description: str = ""


# --- Cross-entity records -------------------------------------------------------


@dataclass(slots=True)
class Army:
    """Troops of one unit type belonging to one faction."""

    faction_id: FactionID
    unit_id: UnitID
    size: int = 0


@dataclass(slots=True)
class Border:
    """Derived adjacency edge; ``region1_id`` always sorts before ``region2_id``."""

    region1_id: RegionID
    region2_id: RegionID

    @property
    def key(self) -> BorderKey:
        return (self.region1_id, self.region2_id)


@dataclass(slots=True)
class Relation:
    """Diplomatic score held by ``source_faction_id`` towards ``target_faction_id``."""

    source_faction_id: FactionID
    target_faction_id: FactionID
    value: int = 0


@dataclass(slots=True)
class World:
    """World definition metadata; immutable once the world is loaded."""

    id: WorldID
    name: str
    width: int
    height: int
    base_region_income: int
    base_region_recruitment: int
    base_faction_recruitment: int
    min_troops_per_attack: int
    starting_wealth: int
    starting_troops: int
    holding_slots_per_faction: int
    holdings_price: int = 0
    description: str = ""
    author: str = ""
    version: str = "1.0"
