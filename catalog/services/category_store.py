# catalog/services/category_store.py
from __future__ import annotations
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, DBAPIError, OperationalError

from catalog.db import Database
from catalog.errors import ConstraintViolation, StoreUnavailable
from catalog.models.category import Category


class CategoryStore:
    """
    Persistenz der Kategorie-Zeilen (id, name, parent_id).
    Jede Operation läuft in einer eigenen, kurzen Transaktion.
    Zeilen werden nur angelegt, nie verändert.
    """

    def __init__(self, database: Database):
        self.database = database

    # -------------------------------------------------
    # Lesen
    # -------------------------------------------------
    def find_by_name_and_parent(self, name: str, parent_id: Optional[int]) -> Optional[Category]:
        stmt = select(Category).where(Category.name == name)
        if parent_id is None:
            stmt = stmt.where(Category.parent_id.is_(None))
        else:
            stmt = stmt.where(Category.parent_id == parent_id)
        try:
            with self.database.session_scope() as db:
                return db.execute(stmt).scalar_one_or_none()
        except (OperationalError, DBAPIError) as e:
            raise StoreUnavailable(f"category lookup failed: {e}") from e

    def get(self, category_id: int) -> Optional[Category]:
        try:
            with self.database.session_scope() as db:
                return db.get(Category, category_id)
        except (OperationalError, DBAPIError) as e:
            raise StoreUnavailable(f"category lookup failed: {e}") from e

    def list_all(self) -> List[Category]:
        """Alle Zeilen; Reihenfolge ist für Aufrufer ohne Bedeutung."""
        try:
            with self.database.session_scope() as db:
                return list(db.execute(select(Category)).scalars().all())
        except (OperationalError, DBAPIError) as e:
            raise StoreUnavailable(f"category listing failed: {e}") from e

    # -------------------------------------------------
    # Schreiben
    # -------------------------------------------------
    def create(self, name: str, parent_id: Optional[int] = None) -> Category:
        """
        Legt eine Zeile an und committet sofort.
        ConstraintViolation, wenn (name, parent_id) schon existiert.
        """
        c = Category(name=name, parent_id=parent_id)
        try:
            with self.database.session_scope() as db:
                db.add(c)
                db.flush()
        except IntegrityError as e:
            raise ConstraintViolation(name, parent_id) from e
        except (OperationalError, DBAPIError) as e:
            raise StoreUnavailable(f"category insert failed: {e}") from e
        return c
