"""Per-session game context.

A :class:`Game` bundles the mutable store with the load-time derivatives
(tile grid, region border graph) and the faction border index that follows
region ownership.  Every turn-time operation receives it explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .borders import BorderGraph, FactionBorderIndex
from .errors import LoadError
from .events import PlayerRegionAttacked
from .loader import LoadedWorld, load_world
from .models import FactionID, RegionID, World
from .rules_config import DEFAULT_RULES, RulesConfig
from .store import EntityStore
from .tiles import TileGrid

if TYPE_CHECKING:
    from dominion.interfaces import IWorldSource

    from .turn import TurnReport

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Game:
    store: EntityStore
    tiles: TileGrid
    borders: BorderGraph
    faction_borders: FactionBorderIndex
    player_faction_id: FactionID
    rules: RulesConfig = DEFAULT_RULES
    turn: int = 0
    pending_events: list[PlayerRegionAttacked] = field(default_factory=list)
    last_report: TurnReport | None = None

    @property
    def world(self) -> World:
        return self.store.world

    @property
    def player_alive(self) -> bool:
        return self.store.get_faction(self.player_faction_id).alive

    def transfer_region(self, region_id: RegionID, faction_id: FactionID) -> None:
        """Hand a region to another faction; the sovereign claim is left as is."""

        region = self.store.get_region(region_id)
        self.store.get_faction(faction_id)
        region.faction_id = faction_id
        self.faction_borders.transfer(region_id, faction_id)

    def factions_adjacent(self, faction1_id: FactionID, faction2_id: FactionID) -> bool:
        return self.faction_borders.factions_adjacent(faction1_id, faction2_id)

    def regions_adjacent(self, region1_id: RegionID, region2_id: RegionID) -> bool:
        return self.borders.regions_adjacent(region1_id, region2_id)

    def faction_id_at(self, x: int, y: int) -> FactionID:
        """Faction occupying the region under tile ``(x, y)``."""

        return self.store.regions[self.tiles.region_at(x, y)].faction_id

    def faction_centre(self, faction_id: FactionID) -> tuple[int, int] | None:
        """Integer centroid of every tile the faction occupies, ``None`` if it has none."""

        self.store.get_faction(faction_id)
        occupied = {region.id for region in self.store.faction_regions(faction_id)}
        if not occupied:
            return None
        total_x = total_y = count = 0
        for x, y, region_id in self.tiles.iter_region_tiles():
            if region_id in occupied:
                total_x += x
                total_y += y
                count += 1
        if count == 0:
            return None
        return (total_x // count, total_y // count)

    def drain_events(self) -> list[PlayerRegionAttacked]:
        events, self.pending_events = self.pending_events, []
        return events


def start_game(
    loaded: LoadedWorld,
    player_faction_id: FactionID,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Game:
    """Wrap a freshly loaded world into a playable game.

    Raises:
        EntityNotFoundError: ``player_faction_id`` is not part of the world.
        LoadError: the configured recruitment unit is missing from the world.
    """

    store = loaded.store
    store.get_faction(player_faction_id)
    unit_id = rules.recruitment.recruit_target_unit_id
    if unit_id not in store.units:
        raise LoadError(f"world {store.world.id!r} has no recruitment unit {unit_id!r}")

    owners = {region.id: region.faction_id for region in store.regions.values()}
    return Game(
        store=store,
        tiles=loaded.tiles,
        borders=loaded.graph,
        faction_borders=FactionBorderIndex(loaded.graph, owners),
        player_faction_id=player_faction_id,
        rules=rules,
    )


def new_game(
    world_id: str,
    player_faction_id: FactionID,
    source: IWorldSource,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    max_workers: int | None = None,
) -> Game:
    """Load ``world_id`` from ``source`` and start a game as ``player_faction_id``."""

    game = start_game(
        load_world(world_id, source, max_workers=max_workers),
        player_faction_id,
        rules=rules,
    )
    logger.info("new game on %s as %s", world_id, player_faction_id)
    return game
