# catalog/errors.py
from __future__ import annotations


class CatalogError(Exception):
    """Basisklasse aller Fehler des Kategorie-Moduls."""


class InvalidPath(CatalogError, ValueError):
    """Roher Kategorie-Pfad ist leer, enthält nur leere Segmente oder ein zu langes Segment."""


class ConstraintViolation(CatalogError):
    """(name, parent_id) ist bereits vergeben – typischerweise ein paralleler Insert."""

    def __init__(self, name: str, parent_id: int | None):
        super().__init__(f"category {name!r} already exists under parent {parent_id}")
        self.name = name
        self.parent_id = parent_id


class StoreUnavailable(CatalogError):
    """Datenbank nicht erreichbar oder Abfrage fehlgeschlagen."""


class CategoryNotFound(CatalogError, LookupError):
    def __init__(self, category_id: int):
        super().__init__(f"category {category_id} not found")
        self.category_id = category_id
