# catalog/services/import_service.py
"""
CSV-Import: pro Zeile Kategorie-Pfad materialisieren und Produkt mit der
Blatt-Kategorie speichern. Fehlerhafte Zeilen werden übersprungen und
gemeldet, der Rest des Batches läuft weiter.
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd
from sqlalchemy.exc import IntegrityError, DBAPIError

from catalog.db import Database
from catalog.errors import ConstraintViolation, InvalidPath, StoreUnavailable
from catalog.models.category import Category
from catalog.services.category_store import CategoryStore
from catalog.services.path_materializer import PathMaterializer
from catalog.services.product_service import upsert_product

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("product_id", "product_name", "category")


@dataclass
class ImportReport:
    imported: int = 0
    categories_created: int = 0
    skipped: List[Tuple[int, str]] = field(default_factory=list)
    failed: List[Tuple[int, str]] = field(default_factory=list)


def read_products_csv(csv_path: str | Path) -> pd.DataFrame:
    """Alles als String lesen; leere Zellen bleiben "" (kein NaN)."""
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")
    return df


class _Importer:
    def __init__(self, database: Database):
        self.database = database
        self.report = ImportReport()
        self._lock = threading.Lock()
        self.materializer = PathMaterializer(CategoryStore(database), on_created=self._on_category_created)

    def _on_category_created(self, _category: Category) -> None:
        with self._lock:
            self.report.categories_created += 1

    def _skip(self, line: int, reason: str) -> None:
        logger.warning("Zeile %s übersprungen: %s", line, reason)
        with self._lock:
            self.report.skipped.append((line, reason))

    def _fail(self, line: int, reason: str) -> None:
        logger.error("Zeile %s fehlgeschlagen: %s", line, reason)
        with self._lock:
            self.report.failed.append((line, reason))

    def import_row(self, line: int, row: Dict[str, Any]) -> None:
        product_id = (row.get("product_id") or "").strip()
        if not product_id:
            self._skip(line, "missing product_id")
            return
        try:
            category_id = self.materializer.materialize(row.get("category"))
        except InvalidPath as e:
            self._skip(line, str(e))
            return
        except (StoreUnavailable, ConstraintViolation) as e:
            self._fail(line, str(e))
            return

        try:
            with self.database.session_scope() as db:
                upsert_product(db, product_id, row, category_id)
        except IntegrityError as e:
            # z.B. gleiche product_id parallel in zwei Workern
            self._fail(line, f"product {product_id!r} conflicts: {e.orig}")
            return
        except DBAPIError as e:
            self._fail(line, f"product insert failed: {e}")
            return

        with self._lock:
            self.report.imported += 1


def import_products(csv_path: str | Path, database: Database, workers: int = 1) -> ImportReport:
    df = read_products_csv(csv_path)
    importer = _Importer(database)

    # Zeilennummer wie im Editor: Header = 1, erste Datenzeile = 2
    rows = [(i + 2, rec) for i, rec in enumerate(df.to_dict("records"))]

    if workers <= 1:
        for line, rec in rows:
            importer.import_row(line, rec)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(lambda item: importer.import_row(*item), rows))

    report = importer.report
    report.skipped.sort()
    report.failed.sort()
    logger.info(
        "Import fertig: %s Produkte, %s neue Kategorien, %s übersprungen, %s fehlgeschlagen",
        report.imported, report.categories_created, len(report.skipped), len(report.failed),
    )
    return report
