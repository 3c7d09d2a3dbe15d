# catalog/services/path_renderer.py
"""
Baut aus den persistierten Kategorie-Zeilen die vollständigen Anzeige-Pfade
("Electronics > Computers > Laptops").

Pro Durchlauf wird einmal ein Index id -> Zeile aufgebaut; jede Zeile wird
genau einmal aufgelöst (Memo). Kaputte Daten (fehlender Parent, Zyklus)
brechen den Durchlauf nicht ab, sondern werden geloggt.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from catalog.errors import CategoryNotFound

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " > "


class CategoryRow(Protocol):
    id: int
    name: str
    parent_id: Optional[int]


def build_index(rows: Iterable[CategoryRow]) -> Dict[int, CategoryRow]:
    return {r.id: r for r in rows}


def render_path(category_id: int, index: Mapping[int, CategoryRow], memo: Dict[int, str]) -> str:
    """
    Pfad für eine Kategorie. `memo` wird über alle Aufrufe eines Durchlaufs geteilt.
    Iterativ: Kette nach oben sammeln bis Wurzel / Memo-Treffer / Fehler, dann abwärts zusammensetzen.
    """
    if category_id in memo:
        return memo[category_id]
    if category_id not in index:
        raise CategoryNotFound(category_id)

    chain: List[int] = []
    on_chain: Dict[int, int] = {}   # id -> Position in chain
    prefix: Optional[str] = None    # bereits aufgelöster Pfad oberhalb der Kette
    cycle_from: Optional[int] = None

    current: Optional[int] = category_id
    while current is not None:
        if current in memo:
            prefix = memo[current]
            break
        if current in on_chain:
            # alles ab der ersten Wiederholung gehört zum Zyklus
            cycle_from = on_chain[current]
            logger.warning(
                "Zyklus in Kategorien erkannt: %s",
                " -> ".join(str(i) for i in chain[cycle_from:] + [current]),
            )
            break
        row = index[current]
        on_chain[current] = len(chain)
        chain.append(current)

        parent_id = row.parent_id
        if parent_id is not None and parent_id not in index:
            logger.warning(
                "Kategorie %s (%r) verweist auf fehlenden Parent %s – wird als Wurzel behandelt",
                row.id, row.name, parent_id,
            )
            parent_id = None
        current = parent_id

    # Zyklus-Mitglieder bekommen ihren nackten Namen
    if cycle_from is not None:
        for cid in chain[cycle_from:]:
            memo[cid] = index[cid].name
        chain = chain[:cycle_from]
        prefix = memo[current]

    for cid in reversed(chain):
        name = index[cid].name
        prefix = name if prefix is None else f"{prefix}{PATH_SEPARATOR}{name}"
        memo[cid] = prefix

    return memo[category_id]


def render_all(rows: Iterable[CategoryRow]) -> List[Tuple[int, str]]:
    """
    (id, Pfad) für jede Zeile, alphabetisch ohne Beachtung der Groß-/Kleinschreibung
    sortiert (bei Gleichstand exakter Pfad, dann id).
    """
    index = build_index(rows)
    memo: Dict[int, str] = {}
    out = [(cid, render_path(cid, index, memo)) for cid in index]
    out.sort(key=lambda item: (item[1].casefold(), item[1], item[0]))
    return out


def render_one(category_id: int, rows: Iterable[CategoryRow]) -> str:
    return render_path(category_id, build_index(rows), {})
