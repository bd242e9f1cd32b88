"""In-memory entity store for a loaded world."""

from __future__ import annotations

from collections import Counter
from typing import TypeVar

from .enums import HoldingType, RegionType
from .errors import DuplicateEntityError, EntityNotFoundError
from .models import (
    Army,
    ArmyKey,
    Biome,
    BiomeID,
    Border,
    BorderKey,
    Culture,
    CultureID,
    Faction,
    FactionID,
    Holding,
    HoldingID,
    Region,
    RegionID,
    Relation,
    RelationKey,
    Resource,
    ResourceID,
    Unit,
    UnitID,
    World,
    border_key,
)

_K = TypeVar("_K")
_V = TypeVar("_V")


def _register(mapping: dict[_K, _V], entity: str, key: _K, value: _V) -> None:
    if key in mapping:
        raise DuplicateEntityError(entity, key)
    mapping[key] = value


def _lookup(mapping: dict[_K, _V], entity: str, key: _K) -> _V:
    try:
        return mapping[key]
    except KeyError:
        raise EntityNotFoundError(entity, key) from None


class EntityStore:
    """Catalogs and cross-entity records of one world.

    Catalogs keep insertion order, which is the order the turn engine walks
    factions in.  The store has no behaviour beyond lookup and in-place
    mutation; rules live in the sibling modules.
    """

    def __init__(self, world: World) -> None:
        self.world = world
        self.biomes: dict[BiomeID, Biome] = {}
        self.cultures: dict[CultureID, Culture] = {}
        self.factions: dict[FactionID, Faction] = {}
        self.holdings: dict[HoldingID, Holding] = {}
        self.regions: dict[RegionID, Region] = {}
        self.resources: dict[ResourceID, Resource] = {}
        self.units: dict[UnitID, Unit] = {}
        self.armies: dict[ArmyKey, Army] = {}
        self.borders: dict[BorderKey, Border] = {}
        self.relations: dict[RelationKey, Relation] = {}

    # --- registration -----------------------------------------------------------

    def add_biome(self, biome: Biome) -> None:
        _register(self.biomes, "Biome", biome.id, biome)

    def add_culture(self, culture: Culture) -> None:
        _register(self.cultures, "Culture", culture.id, culture)

    def add_faction(self, faction: Faction) -> None:
        _register(self.factions, "Faction", faction.id, faction)

    def add_holding(self, holding: Holding) -> None:
        _register(self.holdings, "Holding", holding.id, holding)

    def add_region(self, region: Region) -> None:
        _register(self.regions, "Region", region.id, region)

    def add_resource(self, resource: Resource) -> None:
        _register(self.resources, "Resource", resource.id, resource)

    def add_unit(self, unit: Unit) -> None:
        _register(self.units, "Unit", unit.id, unit)

    def add_army(self, army: Army) -> None:
        _register(self.armies, "Army", (army.faction_id, army.unit_id), army)

    def add_relation(self, relation: Relation) -> None:
        key = (relation.source_faction_id, relation.target_faction_id)
        _register(self.relations, "Relation", key, relation)

    def add_border(self, region1_id: RegionID, region2_id: RegionID) -> Border:
        """Register the border between two distinct regions under its canonical key."""

        if region1_id == region2_id:
            raise ValueError(f"region {region1_id!r} cannot border itself")
        key = border_key(region1_id, region2_id)
        border = Border(region1_id=key[0], region2_id=key[1])
        _register(self.borders, "Border", key, border)
        return border

    def has_border(self, region1_id: RegionID, region2_id: RegionID) -> bool:
        return border_key(region1_id, region2_id) in self.borders

    # --- lookups ----------------------------------------------------------------

    def get_biome(self, biome_id: BiomeID) -> Biome:
        return _lookup(self.biomes, "Biome", biome_id)

    def get_culture(self, culture_id: CultureID) -> Culture:
        return _lookup(self.cultures, "Culture", culture_id)

    def get_faction(self, faction_id: FactionID) -> Faction:
        return _lookup(self.factions, "Faction", faction_id)

    def get_holding(self, holding_id: HoldingID) -> Holding:
        return _lookup(self.holdings, "Holding", holding_id)

    def get_region(self, region_id: RegionID) -> Region:
        return _lookup(self.regions, "Region", region_id)

    def get_resource(self, resource_id: ResourceID) -> Resource:
        return _lookup(self.resources, "Resource", resource_id)

    def get_unit(self, unit_id: UnitID) -> Unit:
        return _lookup(self.units, "Unit", unit_id)

    def get_army(self, faction_id: FactionID, unit_id: UnitID) -> Army:
        return _lookup(self.armies, "Army", (faction_id, unit_id))

    def find_army(self, faction_id: FactionID, unit_id: UnitID) -> Army | None:
        return self.armies.get((faction_id, unit_id))

    def get_relation(self, source_id: FactionID, target_id: FactionID) -> Relation:
        return _lookup(self.relations, "Relation", (source_id, target_id))

    # --- derived queries --------------------------------------------------------

    def alive_factions(self) -> list[Faction]:
        return [faction for faction in self.factions.values() if faction.alive]

    def region_owner(self, region_id: RegionID) -> FactionID:
        return self.get_region(region_id).faction_id

    def faction_regions(self, faction_id: FactionID) -> list[Region]:
        return [region for region in self.regions.values() if region.faction_id == faction_id]

    def faction_region_count(self, faction_id: FactionID) -> int:
        return sum(1 for region in self.regions.values() if region.faction_id == faction_id)

    def faction_capital(self, faction_id: FactionID) -> Region | None:
        """Return the capital the faction still holds, or ``None`` once it is lost."""

        for region in self.regions.values():
            if (
                region.type == RegionType.CAPITAL
                and region.faction_id == faction_id
                and region.sovereign_faction_id == faction_id
            ):
                return region
        return None

    def region_holdings(self, region_id: RegionID) -> list[Holding]:
        """Developed holdings of a region; empty slots are excluded."""

        return [
            holding
            for holding in self.holdings.values()
            if holding.region_id == region_id and holding.type != HoldingType.EMPTY
        ]

    def region_empty_holdings(self, region_id: RegionID) -> list[Holding]:
        return [
            holding
            for holding in self.holdings.values()
            if holding.region_id == region_id and holding.type == HoldingType.EMPTY
        ]

    def region_has_empty_holding_slots(self, region_id: RegionID) -> bool:
        return bool(self.region_empty_holdings(region_id))

    def faction_holdings(self, faction_id: FactionID) -> list[Holding]:
        """Developed holdings located in regions the faction currently occupies."""

        return [
            holding
            for holding in self.holdings.values()
            if holding.type != HoldingType.EMPTY
            and self.regions[holding.region_id].faction_id == faction_id
        ]

    def faction_holding_counts(self, faction_id: FactionID) -> Counter[HoldingType]:
        return Counter(holding.type for holding in self.faction_holdings(faction_id))

    def faction_armies(self, faction_id: FactionID) -> list[Army]:
        return [army for army in self.armies.values() if army.faction_id == faction_id]

    def faction_troops(self, faction_id: FactionID) -> int:
        return sum(army.size for army in self.faction_armies(faction_id))

    def faction_relations(self, faction_id: FactionID) -> list[Relation]:
        return [
            relation
            for relation in self.relations.values()
            if relation.source_faction_id == faction_id
        ]
