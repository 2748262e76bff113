"""JSON snapshot loading for record sets and payloads.

A snapshot is what the caller's storage looked like when it asked for a
decision: a JSON array of roll or catalog records.  Payload files hold a
single JSON object.  Nothing here writes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from rollctl.domain.models import Catalog, Roll

_M = TypeVar("_M", bound=BaseModel)

_ROLLS: TypeAdapter[list[Roll]] = TypeAdapter(list[Roll])
_CATALOGS: TypeAdapter[list[Catalog]] = TypeAdapter(list[Catalog])


class SnapshotError(ValueError):
    """An input file could not be read or does not match its schema."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SnapshotError(path, "not valid UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(path, f"invalid JSON: {exc.msg} (line {exc.lineno})") from exc


def _validate(path: Path, adapter: TypeAdapter[list[_M]]) -> list[_M]:
    try:
        return adapter.validate_python(_read_json(path))
    except ValidationError as exc:
        raise SnapshotError(path, _first_error(exc)) from exc


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else str(err["msg"])


def load_rolls(path: Path) -> list[Roll]:
    """Load a JSON array of roll records."""
    return _validate(path, _ROLLS)


def load_catalogs(path: Path) -> list[Catalog]:
    """Load a JSON array of catalog records."""
    return _validate(path, _CATALOGS)


def load_payload(path: Path, model: type[_M]) -> _M:
    """Load a single JSON object as *model* (a create or update payload)."""
    try:
        return model.model_validate(_read_json(path))
    except ValidationError as exc:
        raise SnapshotError(path, _first_error(exc)) from exc


def find_by_id(records: list[_M], record_id: str) -> _M | None:
    """Return the record whose ``id`` equals *record_id*, if any."""
    return next((r for r in records if getattr(r, "id", None) == record_id), None)
