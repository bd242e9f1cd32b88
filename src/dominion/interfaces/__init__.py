"""Protocol-based interfaces for Dominion collaborators.

This module exports the fetch contracts consumed by the world loader,
enabling file-backed implementations in production and in-memory fakes in
tests.
"""

from dominion.interfaces.raster import Colour, IRasterMap
from dominion.interfaces.repository import IEntityRepository, IWorldSource

__all__ = [
    "Colour",
    "IEntityRepository",
    "IRasterMap",
    "IWorldSource",
]
