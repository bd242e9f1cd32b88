"""JSON-based repository for saved games."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import TypeAdapter

from dominion.domain.snapshot import GameSnapshot

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class JsonSessionRepository:
    """Persist game snapshots as JSON files, one per save slot."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self._adapter: TypeAdapter[GameSnapshot] = TypeAdapter(GameSnapshot)

    def _path_for(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise ValueError(f"invalid save slot {slot!r}")
        return self.base_path / f"save_{slot}.json"

    def save(self, slot: str, snapshot: GameSnapshot) -> Path:
        """Serialize a snapshot to disk and return its path."""

        path = self._path_for(slot)
        self.base_path.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self._adapter.dump_json(snapshot, indent=2))
        return path

    def load(self, slot: str) -> GameSnapshot:
        """Load a previously saved snapshot.

        Raises:
            FileNotFoundError: nothing was saved under ``slot``.
        """

        return self._adapter.validate_json(self._path_for(slot).read_bytes())

    def list_slots(self) -> list[str]:
        """Return every slot currently persisted, sorted."""

        if not self.base_path.is_dir():
            return []
        prefix = "save_"
        suffix = ".json"
        slots: list[str] = []
        for path in self.base_path.glob("save_*.json"):
            raw = path.name[len(prefix) : -len(suffix)]
            if _SLOT_PATTERN.match(raw):
                slots.append(raw)
        return sorted(slots)

    def delete(self, slot: str) -> None:
        """Remove a snapshot if it exists."""

        path = self._path_for(slot)
        if path.exists():
            path.unlink()
