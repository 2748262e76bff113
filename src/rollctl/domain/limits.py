"""Numeric bounds enforced by the guards.

Defaults are the production constants; ``rollctl.toml`` may override
them through the ``[rolls]`` and ``[catalogs]`` sections.
"""

from __future__ import annotations

from pydantic import BaseModel


class RollLimits(BaseModel):
    """Bounds applied to roll payloads."""

    model_config = {"frozen": True}

    max_length_meters: float = 1000
    min_barcode_length: int = 3
    max_barcode_length: int = 50
    max_color_length: int = 50
    max_location_length: int = 100


class CatalogLimits(BaseModel):
    """Bounds applied to catalog payloads."""

    model_config = {"frozen": True}

    min_code_length: int = 2
    max_code_length: int = 20
    min_name_length: int = 2
    max_name_length: int = 100
    min_material_length: int = 2
    max_material_length: int = 50
    max_description_length: int = 500


DEFAULT_ROLL_LIMITS = RollLimits()
DEFAULT_CATALOG_LIMITS = CatalogLimits()
