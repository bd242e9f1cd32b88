"""File-backed persistence for Dominion world definitions and saved games."""

from dominion.repository.json_store import JsonEntityRepository
from dominion.repository.raster import PillowRasterMap
from dominion.repository.session_store import JsonSessionRepository
from dominion.repository.world_store import FileWorldSource

__all__ = [
    "FileWorldSource",
    "JsonEntityRepository",
    "JsonSessionRepository",
    "PillowRasterMap",
]
