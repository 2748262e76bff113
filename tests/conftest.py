"""Shared pytest fixtures and test helpers for rollctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from rollctl.domain.models import Catalog, Roll
from rollctl.domain.types import CatalogStatus, RollStatus
from rollctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_ambient_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep env vars and global logging/telemetry state from leaking between tests."""
    for name in ("ROLLCTL_CONFIG", "ROLLCTL_ROLLS__MAX_LENGTH_METERS", "ROLLCTL_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("rollctl").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("rollctl").setLevel(pkg_level)
    structlog.reset_defaults()


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from an empty temp dir so no rollctl.toml is found."""
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Record builders
# ---------------------------------------------------------------------------


def make_roll(
    roll_id: str = "r-1",
    *,
    barcode: str = "B1",
    status: RollStatus = RollStatus.IN_STOCK,
    length_meters: float = 50.0,
    catalog_id: str = "C1",
    **kwargs: Any,
) -> Roll:
    return Roll(
        id=roll_id,
        barcode=barcode,
        status=status,
        length_meters=length_meters,
        catalog_id=catalog_id,
        **kwargs,
    )


def make_catalog(
    catalog_id: str = "c-1",
    *,
    code: str = "COT-01",
    name: str = "Cotton",
    material: str = "Cotton",
    status: CatalogStatus = CatalogStatus.ACTIVE,
    **kwargs: Any,
) -> Catalog:
    return Catalog(
        id=catalog_id,
        code=code,
        name=name,
        material=material,
        status=status,
        **kwargs,
    )


def write_json(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path* and return the path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def rolls_file(tmp_path: Path) -> Path:
    """Snapshot with one roll per status, camelCase keys as a caller would send."""
    return write_json(
        tmp_path / "rolls.json",
        [
            {
                "id": "r-1",
                "barcode": "B1",
                "status": "in_stock",
                "lengthMeters": 50,
                "catalogId": "C1",
            },
            {
                "id": "r-2",
                "barcode": "B2",
                "status": "reserved",
                "lengthMeters": 20,
                "catalogId": "C1",
            },
            {
                "id": "r-3",
                "barcode": "B3",
                "status": "sold",
                "lengthMeters": 10,
                "catalogId": "C2",
                "location": "A",
            },
        ],
    )


@pytest.fixture
def catalogs_file(tmp_path: Path) -> Path:
    return write_json(
        tmp_path / "catalogs.json",
        [
            {"id": "C1", "code": "COT-01", "name": "Cotton", "material": "Cotton"},
            {"id": "C2", "code": "LIN-01", "name": "Linen", "material": "Linen"},
            {
                "id": "C3",
                "code": "OLD-01",
                "name": "Old stock",
                "material": "Wool",
                "status": "archived",
            },
        ],
    )
