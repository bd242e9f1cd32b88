"""Capture and reapply the mutable part of a game.

A snapshot only carries what turns change.  Restoring reloads the world
definition it was taken from and overlays the saved state, so catalogs and
rasters are never duplicated into save files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .diplomacy import clamp_relation
from .economy import add_units
from .enums import HoldingType
from .errors import EntityNotFoundError, LoadError
from .game import Game, new_game
from .models import FactionID, HoldingID, RegionID, UnitID, WorldID
from .rules_config import DEFAULT_RULES, RulesConfig

if TYPE_CHECKING:
    from dominion.interfaces import IWorldSource


@dataclass(slots=True)
class FactionState:
    wealth: int
    alive: bool


@dataclass(slots=True)
class ArmyState:
    faction_id: FactionID
    unit_id: UnitID
    size: int


@dataclass(slots=True)
class RelationState:
    source_faction_id: FactionID
    target_faction_id: FactionID
    value: int


@dataclass(slots=True)
class GameSnapshot:
    """Serializable game state on top of a world definition."""

    world_id: WorldID
    player_faction_id: FactionID
    turn: int
    factions: dict[FactionID, FactionState] = field(default_factory=dict)
    region_owners: dict[RegionID, FactionID] = field(default_factory=dict)
    holdings: dict[HoldingID, HoldingType] = field(default_factory=dict)
    armies: list[ArmyState] = field(default_factory=list)
    relations: list[RelationState] = field(default_factory=list)


def snapshot_game(game: Game) -> GameSnapshot:
    store = game.store
    return GameSnapshot(
        world_id=store.world.id,
        player_faction_id=game.player_faction_id,
        turn=game.turn,
        factions={
            faction.id: FactionState(faction.wealth, faction.alive)
            for faction in store.factions.values()
        },
        region_owners={region.id: region.faction_id for region in store.regions.values()},
        holdings={holding.id: holding.type for holding in store.holdings.values()},
        armies=[
            ArmyState(army.faction_id, army.unit_id, army.size) for army in store.armies.values()
        ],
        relations=[
            RelationState(relation.source_faction_id, relation.target_faction_id, relation.value)
            for relation in store.relations.values()
        ],
    )


def restore_game(
    snapshot: GameSnapshot,
    source: IWorldSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    max_workers: int | None = None,
) -> Game:
    """Reload the snapshot's world and overlay the saved state.

    Raises:
        LoadError: the world cannot be loaded or no longer matches the
            snapshot (unknown factions, regions, holdings or units).
    """

    try:
        game = new_game(
            snapshot.world_id,
            snapshot.player_faction_id,
            source,
            rules=rules,
            max_workers=max_workers,
        )
        store = game.store
        for faction_id, state in snapshot.factions.items():
            faction = store.get_faction(faction_id)
            faction.wealth = state.wealth
            faction.alive = state.alive
        for region_id, owner in snapshot.region_owners.items():
            game.transfer_region(region_id, owner)
        for holding_id, holding_type in snapshot.holdings.items():
            store.get_holding(holding_id).type = holding_type
        for army in snapshot.armies:
            existing = store.find_army(army.faction_id, army.unit_id)
            if existing is None:
                add_units(store, army.faction_id, army.unit_id, army.size)
            else:
                existing.size = max(0, army.size)
        for relation in snapshot.relations:
            store.get_relation(relation.source_faction_id, relation.target_faction_id).value = (
                clamp_relation(relation.value)
            )
    except EntityNotFoundError as exc:
        raise LoadError(f"snapshot does not match world {snapshot.world_id!r}: {exc}") from exc

    game.turn = snapshot.turn
    return game
