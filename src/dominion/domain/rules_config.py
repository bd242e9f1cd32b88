"""Declarative rule configuration for the Dominion domain layer."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RECRUIT_TARGET_UNIT_ID = "militia"


@dataclass(frozen=True, slots=True)
class RecruitmentRules:
    """Where per-turn recruits are placed."""

    recruit_target_unit_id: str = DEFAULT_RECRUIT_TARGET_UNIT_ID


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Casualty fractions applied to every army entry of each side."""

    winner_casualty_ratio: float = 0.1
    loser_casualty_ratio: float = 0.3


@dataclass(frozen=True, slots=True)
class DiplomacyRules:
    """Relation shifts caused by hostile actions."""

    attack_relation_penalty: int = 10


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    recruitment: RecruitmentRules = RecruitmentRules()
    combat: CombatRules = CombatRules()
    diplomacy: DiplomacyRules = DiplomacyRules()


DEFAULT_RULES = RulesConfig()
