"""Runtime primitives backing the Dominion HTTP API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from dominion.config import Settings, get_settings
from dominion.domain import models as dm
from dominion.domain.combat import BattleReport
from dominion.domain.events import PlayerRegionAttacked
from dominion.domain.game import Game
from dominion.domain.turn import TurnReport
from dominion.factory import create_game_service
from dominion.services.game_service import GameService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiState:
    """The game service shared by the FastAPI layer.

    The domain allows a single writer at a time, so every call into the
    service goes through :meth:`run`, which serializes calls and keeps turn
    processing off the event loop.
    """

    def __init__(
        self, *, settings: Settings | None = None, service: GameService | None = None
    ) -> None:
        self.settings = settings or get_settings()
        self.games = service or create_game_service(self.settings)
        self._lock = asyncio.Lock()

    async def run(self, func: Callable[..., T], /, *args: object) -> T:
        async with self._lock:
            return await asyncio.to_thread(func, *args)

    async def shutdown(self) -> None:
        if self.games.has_game:
            game = self.games.game
            logger.info("shutting down with game on %s at turn %d", game.world.id, game.turn)


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()


def to_world_dict(world: dm.World) -> dict[str, object]:
    return {
        "id": world.id,
        "name": world.name,
        "description": world.description,
        "author": world.author,
        "version": world.version,
        "width": world.width,
        "height": world.height,
    }


def to_game_dict(game: Game) -> dict[str, object]:
    """Return a JSON-friendly overview of the running game."""

    store = game.store
    return {
        "world": to_world_dict(game.world),
        "player_faction_id": game.player_faction_id,
        "player_alive": game.player_alive,
        "turn": game.turn,
        "alive_factions": [faction.id for faction in store.alive_factions()],
        "pending_events": len(game.pending_events),
    }


def to_faction_dict(faction: dm.Faction) -> dict[str, object]:
    return {
        "id": faction.id,
        "name": faction.name,
        "colour": faction.colour,
        "culture_id": faction.culture_id,
        "wealth": faction.wealth,
        "alive": faction.alive,
    }


def to_region_dict(region: dm.Region) -> dict[str, object]:
    return {
        "id": region.id,
        "name": region.name,
        "colour": region.colour,
        "type": str(region.type),
        "faction_id": region.faction_id,
        "sovereign_faction_id": region.sovereign_faction_id,
    }


def to_holding_dict(holding: dm.Holding) -> dict[str, object]:
    return {
        "id": holding.id,
        "name": holding.name,
        "region_id": holding.region_id,
        "type": str(holding.type),
    }


def to_army_dict(army: dm.Army) -> dict[str, object]:
    return {"faction_id": army.faction_id, "unit_id": army.unit_id, "size": army.size}


def to_relation_dict(relation: dm.Relation) -> dict[str, object]:
    return {
        "source_faction_id": relation.source_faction_id,
        "target_faction_id": relation.target_faction_id,
        "value": relation.value,
    }


def to_battle_dict(battle: BattleReport) -> dict[str, object]:
    return {
        "attacker_faction_id": battle.attacker_faction_id,
        "defender_faction_id": battle.defender_faction_id,
        "region_id": battle.region_id,
        "result": str(battle.result),
        "attacker_strength": battle.attacker_strength,
        "defender_strength": battle.defender_strength,
        "attacker_losses": dict(battle.attacker_losses),
        "defender_losses": dict(battle.defender_losses),
    }


def to_event_dict(event: PlayerRegionAttacked) -> dict[str, object]:
    return {
        "region_id": event.region_id,
        "attacker_faction_id": event.attacker_faction_id,
        "result": str(event.result),
    }


def to_report_dict(report: TurnReport) -> dict[str, object]:
    return {
        "turn": report.turn,
        "battles": [to_battle_dict(battle) for battle in report.battles],
        "events": [to_event_dict(event) for event in report.events],
        "eliminated": list(report.eliminated),
    }
