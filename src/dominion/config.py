"""Lightweight configuration for the Dominion server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dominion.domain.rules_config import (
    DEFAULT_RECRUIT_TARGET_UNIT_ID,
    CombatRules,
    DiplomacyRules,
    RecruitmentRules,
    RulesConfig,
)


class Settings(BaseSettings):
    """Application settings, overridable through ``DOMINION_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="DOMINION_", env_file=".env", env_file_encoding="utf-8"
    )

    worlds_dir: Path = Field(default=Path("worlds"), description="Directory of world definitions")
    saves_dir: Path = Field(default=Path("saves"), description="Where saved games live")
    recruit_target_unit_id: str = Field(
        default=DEFAULT_RECRUIT_TARGET_UNIT_ID,
        min_length=1,
        description="Unit that receives each faction's per-turn recruits",
    )
    load_workers: int | None = Field(
        default=None,
        ge=1,
        description="Threads used to classify map rows; None lets the executor decide",
    )
    attack_relation_penalty: int = Field(
        default=DiplomacyRules().attack_relation_penalty,
        ge=0,
        description="Relation lost by both sides whenever one attacks the other",
    )
    winner_casualty_ratio: float = Field(default=CombatRules().winner_casualty_ratio, ge=0.0, le=1.0)
    loser_casualty_ratio: float = Field(default=CombatRules().loser_casualty_ratio, ge=0.0, le=1.0)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()


def rules_from_settings(settings: Settings) -> RulesConfig:
    return RulesConfig(
        recruitment=RecruitmentRules(recruit_target_unit_id=settings.recruit_target_unit_id),
        combat=CombatRules(
            winner_casualty_ratio=settings.winner_casualty_ratio,
            loser_casualty_ratio=settings.loser_casualty_ratio,
        ),
        diplomacy=DiplomacyRules(attack_relation_penalty=settings.attack_relation_penalty),
    )
