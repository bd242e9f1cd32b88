"""Turn orchestration.

Factions are processed one after another in catalog order.  A faction's
attack may change ownership, wealth or relations that the next faction's
elimination check and economy must already see, so nothing here runs
concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .combat import BattleReport, attack_region, can_attack, choose_region_to_attack
from .economy import add_units, apply_economy, recruitment
from .enums import BattleResult
from .events import PlayerRegionAttacked
from .game import Game
from .models import FactionID, RegionID

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TurnReport:
    """What happened during one turn; ``turn`` is the counter after advancing."""

    turn: int
    battles: list[BattleReport] = field(default_factory=list)
    events: list[PlayerRegionAttacked] = field(default_factory=list)
    eliminated: list[FactionID] = field(default_factory=list)


def run_turn(game: Game) -> TurnReport:
    """Advance the game by one turn.

    For every living faction: elimination check, economy, recruitment and,
    for AI factions with enough troops, one attack.  Attacks on the player's
    regions are queued on the game as :class:`PlayerRegionAttacked`.
    """

    store = game.store
    report = TurnReport(turn=game.turn)
    recruit_unit_id = game.rules.recruitment.recruit_target_unit_id

    for faction in store.factions.values():
        if not faction.alive:
            continue
        if store.faction_region_count(faction.id) == 0:
            faction.alive = False
            report.eliminated.append(faction.id)
            logger.info("%s has been eliminated", faction.id)
            continue

        apply_economy(store, faction.id)
        add_units(store, faction.id, recruit_unit_id, recruitment(store, faction.id))

        if not can_attack(game, faction.id):
            continue
        target = choose_region_to_attack(game, faction.id)
        if target is None:
            logger.debug("%s has nothing to attack", faction.id)
            continue
        battle = attack_region(game, faction.id, target)
        report.battles.append(battle)
        if battle.defender_faction_id == game.player_faction_id:
            event = PlayerRegionAttacked(target, faction.id, battle.result)
            report.events.append(event)
            game.pending_events.append(event)

    game.turn += 1
    report.turn = game.turn
    game.last_report = report
    logger.info(
        "turn %d done: %d battles, %d eliminated",
        game.turn,
        len(report.battles),
        len(report.eliminated),
    )
    return report


def player_attack_region(game: Game, region_id: RegionID) -> BattleResult:
    """Resolve the player's attack on ``region_id`` and then run the turn.

    The player's battle is reported first in the resulting turn report.
    The attack minimum only gates AI factions; the player may attack with
    any army.

    Raises:
        InvalidTargetRegionError: the region cannot be attacked.
    """

    battle = attack_region(game, game.player_faction_id, region_id)
    report = run_turn(game)
    report.battles.insert(0, battle)
    return battle.result
