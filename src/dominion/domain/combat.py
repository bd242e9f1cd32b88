"""Target selection and battle resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .diplomacy import change_relations
from .enums import BattleResult
from .errors import InvalidTargetRegionError
from .models import FactionID, RegionID, UnitID
from .store import EntityStore

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BattleReport:
    """Outcome of a single attack, seen from the attacker."""

    attacker_faction_id: FactionID
    defender_faction_id: FactionID
    region_id: RegionID
    result: BattleResult
    attacker_strength: int
    defender_strength: int
    attacker_losses: dict[UnitID, int] = field(default_factory=dict)
    defender_losses: dict[UnitID, int] = field(default_factory=dict)

    @property
    def region_captured(self) -> bool:
        return self.result == BattleResult.VICTORY


def faction_strength(store: EntityStore, faction_id: FactionID) -> int:
    """Sum of army size times unit power over every army of the faction."""

    return sum(
        army.size * store.units[army.unit_id].power for army in store.faction_armies(faction_id)
    )


def can_attack(game: Game, faction_id: FactionID) -> bool:
    """Whether the AI controlling ``faction_id`` may launch an attack this turn."""

    faction = game.store.get_faction(faction_id)
    if faction_id == game.player_faction_id or not faction.alive:
        return False
    return game.store.faction_troops(faction_id) >= game.world.min_troops_per_attack


def attack_candidates(game: Game, faction_id: FactionID) -> list[RegionID]:
    """Foreign regions bordering any region the faction occupies."""

    store = game.store
    candidates: set[RegionID] = set()
    for region in store.faction_regions(faction_id):
        for neighbour in game.borders.region_neighbours(region.id):
            if store.regions[neighbour].faction_id != faction_id:
                candidates.add(neighbour)
    return sorted(candidates)


def choose_region_to_attack(game: Game, faction_id: FactionID) -> RegionID | None:
    """Pick the weakest, least liked neighbour region; ``None`` when there is none."""

    store = game.store
    strengths: dict[FactionID, int] = {}

    def _priority(region_id: RegionID) -> tuple[int, int, str]:
        owner = store.regions[region_id].faction_id
        if owner not in strengths:
            strengths[owner] = faction_strength(store, owner)
        relation = store.relations.get((faction_id, owner))
        return (strengths[owner], relation.value if relation else 0, region_id)

    candidates = attack_candidates(game, faction_id)
    if not candidates:
        return None
    return min(candidates, key=_priority)


def validate_attack(game: Game, attacker_id: FactionID, region_id: RegionID) -> FactionID:
    """Return the defending faction, or raise if the target is not attackable."""

    store = game.store
    store.get_faction(attacker_id)
    region = store.get_region(region_id)
    defender_id = region.faction_id
    if defender_id == attacker_id:
        raise InvalidTargetRegionError(attacker_id, region_id, "region is already occupied")
    if not game.faction_borders.factions_adjacent(attacker_id, defender_id):
        raise InvalidTargetRegionError(
            attacker_id, region_id, f"faction does not border {defender_id}"
        )
    return defender_id


def attack_region(game: Game, attacker_id: FactionID, region_id: RegionID) -> BattleReport:
    """Resolve an attack by ``attacker_id`` on ``region_id``.

    The attacker only wins when strictly stronger.  Both sides lose a share
    of every army, the two factions grow colder towards each other, and a
    victory moves the region to the attacker.

    Raises:
        InvalidTargetRegionError: the region is the attacker's own or its
            owner does not border the attacker.  Nothing is changed.
    """

    defender_id = validate_attack(game, attacker_id, region_id)
    store = game.store
    rules = game.rules

    attacker_strength = faction_strength(store, attacker_id)
    defender_strength = faction_strength(store, defender_id)
    if attacker_strength > defender_strength:
        result = BattleResult.VICTORY
        attacker_ratio = rules.combat.winner_casualty_ratio
        defender_ratio = rules.combat.loser_casualty_ratio
    else:
        result = BattleResult.DEFEAT
        attacker_ratio = rules.combat.loser_casualty_ratio
        defender_ratio = rules.combat.winner_casualty_ratio

    report = BattleReport(
        attacker_faction_id=attacker_id,
        defender_faction_id=defender_id,
        region_id=region_id,
        result=result,
        attacker_strength=attacker_strength,
        defender_strength=defender_strength,
        attacker_losses=apply_casualties(store, attacker_id, attacker_ratio),
        defender_losses=apply_casualties(store, defender_id, defender_ratio),
    )
    change_relations(store, attacker_id, defender_id, -rules.diplomacy.attack_relation_penalty)
    if report.region_captured:
        game.transfer_region(region_id, attacker_id)

    logger.info(
        "%s attacked %s (%s): %d vs %d, %s",
        attacker_id,
        region_id,
        defender_id,
        attacker_strength,
        defender_strength,
        result,
    )
    return report


def apply_casualties(store: EntityStore, faction_id: FactionID, ratio: float) -> dict[UnitID, int]:
    """Remove ``ratio`` of every army entry (rounded to nearest) and return the losses."""

    losses: dict[UnitID, int] = {}
    for army in store.faction_armies(faction_id):
        lost = min(army.size, round(army.size * ratio))
        if lost:
            army.size -= lost
            losses[army.unit_id] = lost
    return losses
