"""Diplomatic relations between factions."""

from __future__ import annotations

from .models import FactionID
from .store import EntityStore

MIN_RELATION = -100
MAX_RELATION = 100


def clamp_relation(value: int) -> int:
    return max(MIN_RELATION, min(MAX_RELATION, value))


def set_relations(
    store: EntityStore,
    source_faction_id: FactionID,
    target_faction_id: FactionID,
    value: int,
) -> int:
    """Set the relation in both directions and return the stored value."""

    forward = store.get_relation(source_faction_id, target_faction_id)
    backward = store.get_relation(target_faction_id, source_faction_id)
    forward.value = clamp_relation(value)
    backward.value = forward.value
    return forward.value


def change_relations(
    store: EntityStore,
    source_faction_id: FactionID,
    target_faction_id: FactionID,
    delta: int,
) -> int:
    """Shift the relation by ``delta`` in both directions and return the new value."""

    current = store.get_relation(source_faction_id, target_faction_id).value
    return set_relations(store, source_faction_id, target_faction_id, current + delta)
