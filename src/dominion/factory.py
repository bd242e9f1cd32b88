"""Service Factory for Dominion.

This module wires the file-backed collaborators into the service layer.
Use it in production code; tests construct ``GameService`` directly with an
in-memory world source.

Example:
    from dominion.config import get_settings
    from dominion.factory import create_game_service

    service = create_game_service(get_settings())
"""

from dominion.config import Settings, rules_from_settings
from dominion.repository.session_store import JsonSessionRepository
from dominion.repository.world_store import FileWorldSource
from dominion.services.game_service import GameService


def create_world_source(settings: Settings) -> FileWorldSource:
    """Create the world source reading ``settings.worlds_dir``."""
    return FileWorldSource(settings.worlds_dir)


def create_session_repository(settings: Settings) -> JsonSessionRepository:
    """Create the save-game repository under ``settings.saves_dir``."""
    return JsonSessionRepository(settings.saves_dir)


def create_game_service(settings: Settings) -> GameService:
    """Create a GameService with all dependencies.

    Args:
        settings: Application settings

    Returns:
        GameService reading worlds and saves from the configured directories
    """
    return GameService(
        create_world_source(settings),
        create_session_repository(settings),
        rules=rules_from_settings(settings),
        load_workers=settings.load_workers,
    )
