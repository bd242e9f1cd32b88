"""Domain model and rules of the Dominion simulation kernel.

The package is organised the way a game flows:

* Dataclasses, identifiers and enumerations (see :mod:`models`, :mod:`enums`).
* The in-memory :class:`~dominion.domain.store.EntityStore`.
* World loading and border derivation (:mod:`loader`, :mod:`tiles`, :mod:`borders`).
* Pure rule functions (:mod:`economy`, :mod:`diplomacy`, :mod:`combat`).
* Turn orchestration over an explicit game context (:mod:`game`, :mod:`turn`).

Everything here runs in memory; persistence lives in :mod:`dominion.repository`.
"""

from . import (
    borders,
    combat,
    diplomacy,
    economy,
    enums,
    errors,
    events,
    game,
    loader,
    models,
    rules_config,
    snapshot,
    store,
    tiles,
    turn,
)

__all__ = [
    "borders",
    "combat",
    "diplomacy",
    "economy",
    "enums",
    "errors",
    "events",
    "game",
    "loader",
    "models",
    "rules_config",
    "snapshot",
    "store",
    "tiles",
    "turn",
]
