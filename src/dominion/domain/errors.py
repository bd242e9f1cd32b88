"""Exception hierarchy raised by the Dominion kernel."""

from __future__ import annotations


class DominionError(Exception):
    """Base class for every kernel error."""


class LoadError(DominionError):
    """A world definition could not be turned into a playable world."""


class EntityNotFoundError(DominionError, LookupError):
    """No entity matches the requested identifier."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class DuplicateEntityError(DominionError):
    """An identifier, colour or border key was registered twice."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key!r} already exists")
        self.entity = entity
        self.key = key


class InvalidTargetRegionError(DominionError):
    """The attacker cannot attack the requested region."""

    def __init__(self, faction_id: str, region_id: str, reason: str) -> None:
        super().__init__(f"{faction_id} cannot attack {region_id}: {reason}")
        self.faction_id = faction_id
        self.region_id = region_id
        self.reason = reason


class GameNotStartedError(DominionError):
    """A command was issued before a game was started."""
