"""Game session service for Dominion.

This service is the command boundary used by the presentation layer:
- Starting a game on a world definition
- Advancing turns and resolving the player's attacks
- Spending wealth on troops and holdings
- Read-only queries over factions, regions, holdings and armies
- Draining the notifications raised for the player
- Saving and restoring games

One service owns at most one running game.  Commands are synchronous and
must not be issued concurrently; callers that serve several clients
serialize them (see :class:`dominion.api.runtime.ApiState`).
"""

from __future__ import annotations

import logging

from dominion.domain import economy, loader
from dominion.domain import models as dm
from dominion.domain.combat import faction_strength
from dominion.domain.enums import BattleResult, HoldingType
from dominion.domain.errors import GameNotStartedError
from dominion.domain.events import PlayerRegionAttacked
from dominion.domain.game import Game, new_game
from dominion.domain.rules_config import DEFAULT_RULES, RulesConfig
from dominion.domain.snapshot import restore_game, snapshot_game
from dominion.domain.turn import TurnReport, player_attack_region, run_turn
from dominion.interfaces import IWorldSource
from dominion.repository.session_store import JsonSessionRepository

logger = logging.getLogger(__name__)


class GameService:
    """Own the running game and expose the commands a client may issue."""

    def __init__(
        self,
        source: IWorldSource,
        sessions: JsonSessionRepository,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        load_workers: int | None = None,
    ) -> None:
        self._source = source
        self._sessions = sessions
        self._rules = rules
        self._load_workers = load_workers
        self._game: Game | None = None

    # --- lifecycle ----------------------------------------------------------------

    @property
    def game(self) -> Game:
        """Return the running game or raise ``GameNotStartedError``."""

        if self._game is None:
            raise GameNotStartedError("no game has been started")
        return self._game

    @property
    def has_game(self) -> bool:
        return self._game is not None

    def list_worlds(self) -> list[dm.World]:
        return loader.list_worlds(self._source, max_workers=self._load_workers)

    def new_game(self, world_id: str, player_faction_id: str) -> Game:
        """Load a world and replace any running game with a fresh one."""

        self._game = new_game(
            world_id,
            dm.FactionID(player_faction_id),
            self._source,
            rules=self._rules,
            max_workers=self._load_workers,
        )
        return self._game

    def save_game(self, slot: str) -> None:
        path = self._sessions.save(slot, snapshot_game(self.game))
        logger.info("game saved to %s", path)

    def load_game(self, slot: str) -> Game:
        """Restore a saved game; ``FileNotFoundError`` if the slot is empty."""

        snapshot = self._sessions.load(slot)
        self._game = restore_game(
            snapshot, self._source, rules=self._rules, max_workers=self._load_workers
        )
        logger.info("game restored from slot %s at turn %d", slot, self._game.turn)
        return self._game

    def list_saves(self) -> list[str]:
        return self._sessions.list_slots()

    def delete_save(self, slot: str) -> None:
        self._sessions.delete(slot)

    # --- commands -----------------------------------------------------------------

    def next_turn(self) -> TurnReport:
        return run_turn(self.game)

    def player_attack_region(self, region_id: str) -> BattleResult:
        game = self.game
        result = player_attack_region(game, dm.RegionID(region_id))
        logger.info("player attacked %s: %s", region_id, result)
        return result

    def recruit_units(self, unit_id: str, amount: int) -> int:
        game = self.game
        return economy.recruit_units(
            game.store, game.player_faction_id, dm.UnitID(unit_id), amount
        )

    def build_holding(self, region_id: str, holding_type: HoldingType) -> dm.Holding | None:
        game = self.game
        return economy.build_holding(
            game.store, game.player_faction_id, dm.RegionID(region_id), holding_type
        )

    def drain_events(self) -> list[PlayerRegionAttacked]:
        return self.game.drain_events()

    # --- queries ------------------------------------------------------------------

    def last_report(self) -> TurnReport | None:
        return self.game.last_report

    def factions(self) -> list[dm.Faction]:
        return list(self.game.store.factions.values())

    def faction(self, faction_id: str) -> dm.Faction:
        return self.game.store.get_faction(dm.FactionID(faction_id))

    def regions(self) -> list[dm.Region]:
        return list(self.game.store.regions.values())

    def region(self, region_id: str) -> dm.Region:
        return self.game.store.get_region(dm.RegionID(region_id))

    def region_holdings(self, region_id: str) -> list[dm.Holding]:
        """Every holding of the region, empty slots included."""

        store = self.game.store
        region = store.get_region(dm.RegionID(region_id))
        return [holding for holding in store.holdings.values() if holding.region_id == region.id]

    def faction_armies(self, faction_id: str) -> list[dm.Army]:
        store = self.game.store
        return store.faction_armies(store.get_faction(dm.FactionID(faction_id)).id)

    def faction_relations(self, faction_id: str) -> list[dm.Relation]:
        store = self.game.store
        return store.faction_relations(store.get_faction(dm.FactionID(faction_id)).id)

    def faction_overview(self, faction_id: str) -> dict[str, object]:
        """Figures a client shows for one faction."""

        game = self.game
        store = game.store
        faction = store.get_faction(dm.FactionID(faction_id))
        capital = store.faction_capital(faction.id)
        counts = store.faction_holding_counts(faction.id)
        return {
            "id": faction.id,
            "name": faction.name,
            "colour": faction.colour,
            "culture_id": faction.culture_id,
            "alive": faction.alive,
            "wealth": faction.wealth,
            "income": economy.income(store, faction.id),
            "outcome": economy.outcome(store, faction.id),
            "recruitment": economy.recruitment(store, faction.id),
            "troops": store.faction_troops(faction.id),
            "strength": faction_strength(store, faction.id),
            "region_count": store.faction_region_count(faction.id),
            "capital_id": capital.id if capital is not None else None,
            "holdings": {str(kind): count for kind, count in sorted(counts.items())},
            "centre": game.faction_centre(faction.id),
            "neighbours": sorted(game.faction_borders.faction_neighbours(faction.id)),
        }

    def faction_id_at(self, x: int, y: int) -> dm.FactionID:
        return self.game.faction_id_at(x, y)

    def regions_adjacent(self, region1_id: str, region2_id: str) -> bool:
        game = self.game
        first = game.store.get_region(dm.RegionID(region1_id))
        second = game.store.get_region(dm.RegionID(region2_id))
        return game.regions_adjacent(first.id, second.id)

    def factions_adjacent(self, faction1_id: str, faction2_id: str) -> bool:
        game = self.game
        first = game.store.get_faction(dm.FactionID(faction1_id))
        second = game.store.get_faction(dm.FactionID(faction2_id))
        return game.factions_adjacent(first.id, second.id)
