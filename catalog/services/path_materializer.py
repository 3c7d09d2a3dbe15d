# catalog/services/path_materializer.py
"""
Wandelt einen Pipe-getrennten Kategorie-String ("Electronics|Computers|Laptops")
in eine Kette von Kategorie-Zeilen um und liefert die id des Blatts.

Fehlende Zeilen werden angelegt. Bereits angelegte Segmente bleiben bei einem
Abbruch bestehen; ein erneuter Aufruf ist idempotent und ergänzt den Rest.
"""
from __future__ import annotations
import logging
from typing import Callable, List, Optional

from catalog.errors import ConstraintViolation, InvalidPath
from catalog.models.category import Category, NAME_MAX_LENGTH
from catalog.services.category_store import CategoryStore

logger = logging.getLogger(__name__)

SEPARATOR = "|"
# Insert -> Konflikt -> erneut lesen; mehr als ein paar Runden deutet auf kaputte Daten hin
MAX_CREATE_ATTEMPTS = 3


def split_path(raw_path: Optional[str]) -> List[str]:
    """
    Zerlegt den Roh-String in getrimmte Segmente.
    Leere Segmente ("A||B", "A| |B") werden ignoriert; bleibt nichts übrig -> InvalidPath.
    """
    if raw_path is None or not str(raw_path).strip():
        raise InvalidPath("category path is empty")
    segments = [s.strip() for s in str(raw_path).split(SEPARATOR)]
    segments = [s for s in segments if s]
    if not segments:
        raise InvalidPath(f"category path {raw_path!r} contains only blank segments")
    too_long = next((s for s in segments if len(s) > NAME_MAX_LENGTH), None)
    if too_long is not None:
        raise InvalidPath(f"category segment longer than {NAME_MAX_LENGTH} characters: {too_long[:40]!r}...")
    return segments


class PathMaterializer:
    def __init__(self, store: CategoryStore, on_created: Optional[Callable[[Category], None]] = None):
        self.store = store
        self.on_created = on_created

    def materialize(self, raw_path: str) -> int:
        """Liefert die id der Blatt-Kategorie; legt fehlende Vorfahren an."""
        segments = split_path(raw_path)
        parent_id: Optional[int] = None
        for name in segments:
            parent_id = self._find_or_create(name, parent_id).id
        return parent_id

    def _find_or_create(self, name: str, parent_id: Optional[int]) -> Category:
        for _attempt in range(MAX_CREATE_ATTEMPTS):
            found = self.store.find_by_name_and_parent(name, parent_id)
            if found is not None:
                logger.debug("Kategorie wiederverwendet: %r (parent=%s) -> %s", name, parent_id, found.id)
                return found
            try:
                created = self.store.create(name, parent_id)
            except ConstraintViolation:
                # paralleler Insert war schneller -> dessen Zeile lesen
                logger.info("Konflikt beim Anlegen von %r (parent=%s), lese erneut", name, parent_id)
                continue
            logger.info("Kategorie angelegt: %r (parent=%s) -> %s", name, parent_id, created.id)
            if self.on_created is not None:
                self.on_created(created)
            return created
        raise ConstraintViolation(name, parent_id)
