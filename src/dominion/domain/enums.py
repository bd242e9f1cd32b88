"""Enumerations used across the Dominion domain."""

from __future__ import annotations

from enum import StrEnum


class RegionType(StrEnum):
    """Region classifications."""

    CAPITAL = "capital"
    ORDINARY = "ordinary"


class HoldingType(StrEnum):
    """Developed sites a region can host.

    Empty holdings are free slots and never count towards the economy.
    """

    EMPTY = "empty"
    CASTLE = "castle"
    CITY = "city"
    TEMPLE = "temple"


class UnitType(StrEnum):
    """Broad troop categories."""

    INFANTRY = "infantry"
    CAVALRY = "cavalry"
    ARCHER = "archer"
    SIEGE = "siege"


class BattleResult(StrEnum):
    """Outcome of an attack, seen from the attacker."""

    VICTORY = "victory"
    DEFEAT = "defeat"


class EntityCategory(StrEnum):
    """Catalog categories supplied by a world definition."""

    BIOME = "biomes"
    CULTURE = "cultures"
    FACTION = "factions"
    HOLDING = "holdings"
    REGION = "regions"
    RESOURCE = "resources"
    UNIT = "units"
