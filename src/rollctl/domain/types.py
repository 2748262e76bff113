"""Classification enums for rolls and catalogs."""

from __future__ import annotations

from enum import StrEnum


class RollStatus(StrEnum):
    """Lifecycle status of a roll."""

    IN_STOCK = "in_stock"
    RESERVED = "reserved"
    SOLD = "sold"


class RollDegree(StrEnum):
    """Quality grade of a roll."""

    A = "A"
    B = "B"
    C = "C"


class CatalogStatus(StrEnum):
    """Publication status of a catalog."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DRAFT = "draft"
