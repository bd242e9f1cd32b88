"""JSON-backed entity catalogs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from dominion.domain.errors import LoadError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class JsonEntityRepository(Generic[SchemaT]):
    """Read one catalog file holding a JSON array of entities.

    Entries are validated with their pydantic schema and converted to domain
    dataclasses.  The file is read on every call; the loader calls it once.
    """

    def __init__(self, path: Path, schema: type[SchemaT]) -> None:
        self.path = path
        self.schema = schema
        self._adapter: TypeAdapter[list[SchemaT]] = TypeAdapter(list[schema])  # type: ignore[valid-type]

    def get_all(self) -> list[Any]:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise LoadError(f"cannot read {self.path}: {exc}") from exc
        try:
            entities = self._adapter.validate_json(data)
        except ValidationError as exc:
            raise LoadError(f"invalid {self.schema.__name__} data in {self.path}: {exc}") from exc
        return [entity.to_domain() for entity in entities]  # type: ignore[attr-defined]


def read_model(path: Path, schema: type[SchemaT]) -> SchemaT:
    """Validate a single JSON object file against ``schema``."""

    try:
        return schema.model_validate_json(path.read_bytes())
    except OSError as exc:
        raise LoadError(f"cannot read {path}: {exc}") from exc
    except ValidationError as exc:
        raise LoadError(f"invalid {schema.__name__} data in {path}: {exc}") from exc
