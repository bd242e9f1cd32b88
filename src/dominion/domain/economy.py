"""Faction economy: income, upkeep, recruitment and purchases.

The three per-turn figures are pure functions of the store.  The helpers
that spend wealth clamp instead of raising: asking for more than a faction
can afford simply buys less.
"""

from __future__ import annotations

import logging

from .enums import HoldingType
from .models import Army, FactionID, Holding, RegionID, UnitID
from .store import EntityStore

logger = logging.getLogger(__name__)

# Fixed gameplay constants, not world configuration.
HOLDING_INCOME: dict[HoldingType, int] = {
    HoldingType.CASTLE: 5,
    HoldingType.CITY: 15,
    HoldingType.TEMPLE: 10,
}


def income(store: EntityStore, faction_id: FactionID) -> int:
    """Wealth earned per turn from occupied regions and developed holdings."""

    total = store.faction_region_count(faction_id) * store.world.base_region_income
    counts = store.faction_holding_counts(faction_id)
    for holding_type, value in HOLDING_INCOME.items():
        total += counts[holding_type] * value
    return total


def outcome(store: EntityStore, faction_id: FactionID) -> int:
    """Upkeep owed per turn for every troop the faction fields."""

    return sum(
        army.size * store.units[army.unit_id].maintenance
        for army in store.faction_armies(faction_id)
    )


def recruitment(store: EntityStore, faction_id: FactionID) -> int:
    """Troops raised for free each turn.

    Holdings do not contribute yet; only regions and the flat faction bonus
    count.
    """

    world = store.world
    return (
        store.faction_region_count(faction_id) * world.base_region_recruitment
        + world.base_faction_recruitment
    )


def apply_economy(store: EntityStore, faction_id: FactionID) -> int:
    """Credit income, debit upkeep and return the net change."""

    faction = store.get_faction(faction_id)
    earned = income(store, faction_id)
    spent = outcome(store, faction_id)
    faction.wealth += earned
    faction.wealth -= spent
    return earned - spent


def add_units(store: EntityStore, faction_id: FactionID, unit_id: UnitID, amount: int) -> Army:
    """Grant troops, creating the army entry on first grant; size never drops below 0."""

    store.get_faction(faction_id)
    store.get_unit(unit_id)
    army = store.find_army(faction_id, unit_id)
    if army is None:
        army = Army(faction_id, unit_id, 0)
        store.add_army(army)
    army.size = max(0, army.size + amount)
    return army


def recruit_units(
    store: EntityStore,
    faction_id: FactionID,
    unit_id: UnitID,
    amount: int,
) -> int:
    """Buy up to ``amount`` troops and return how many were actually recruited."""

    faction = store.get_faction(faction_id)
    unit = store.get_unit(unit_id)
    amount = max(0, amount)
    if unit.price > 0:
        affordable = max(0, faction.wealth) // unit.price
        if affordable < amount:
            logger.debug(
                "%s can only afford %d of %d %s", faction_id, affordable, amount, unit_id
            )
            amount = affordable
    faction.wealth -= amount * unit.price
    add_units(store, faction_id, unit_id, amount)
    return amount


def build_holding(
    store: EntityStore,
    faction_id: FactionID,
    region_id: RegionID,
    holding_type: HoldingType,
) -> Holding | None:
    """Develop an empty holding slot of an occupied region.

    Returns ``None`` without changing anything when the region is not
    occupied by the faction, has no free slot, the faction already uses all
    of its holding slots, or cannot pay the world's holding price.
    """

    if holding_type == HoldingType.EMPTY:
        raise ValueError("cannot build an empty holding")
    faction = store.get_faction(faction_id)
    region = store.get_region(region_id)
    world = store.world

    if region.faction_id != faction_id:
        return None
    slots = store.region_empty_holdings(region_id)
    if not slots:
        return None
    if len(store.faction_holdings(faction_id)) >= world.holding_slots_per_faction:
        return None
    if faction.wealth < world.holdings_price:
        return None

    holding = slots[0]
    holding.type = holding_type
    faction.wealth -= world.holdings_price
    logger.debug("%s built a %s in %s", faction_id, holding_type, region_id)
    return holding
