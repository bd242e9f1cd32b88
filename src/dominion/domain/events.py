"""Outbound notifications produced while a turn runs."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import BattleResult
from .models import FactionID, RegionID


@dataclass(frozen=True, slots=True)
class PlayerRegionAttacked:
    """An AI faction attacked a region held by the player.

    ``result`` is seen from the attacker: ``VICTORY`` means the player lost
    the region.
    """

    region_id: RegionID
    attacker_faction_id: FactionID
    result: BattleResult
