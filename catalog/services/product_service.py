# catalog/services/product_service.py
from __future__ import annotations
import re
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from catalog.models.product import Product

# Alles außer Ziffern, Punkt und Minus entfernen ("₹1,099" -> "1099", "64%" -> "64")
_NUMERIC_JUNK = re.compile(r"[^0-9.\-]")


def parse_float(raw: Any) -> float:
    """Tolerant: unlesbare Werte -> 0.0"""
    if raw is None:
        return 0.0
    cleaned = _NUMERIC_JUNK.sub("", str(raw))
    try:
        return float(cleaned) if cleaned else 0.0
    except ValueError:
        return 0.0


def parse_int(raw: Any) -> int:
    return int(parse_float(raw))


def _normalize(row: Dict[str, Any]) -> Dict[str, Any]:
    def text_or_none(key: str) -> Optional[str]:
        v = (row.get(key) or "").strip()
        return v or None

    return {
        "product_name": (row.get("product_name") or "").strip(),
        "discounted_price": parse_float(row.get("discounted_price")),
        "actual_price": parse_float(row.get("actual_price")),
        "discount_percentage": parse_float(row.get("discount_percentage")),
        "rating": parse_float(row.get("rating")),
        "rating_count": parse_int(row.get("rating_count")),
        "about_product": text_or_none("about_product"),
        "img_link": text_or_none("img_link"),
        "product_link": text_or_none("product_link"),
    }


def upsert_product(db: Session, product_id: str, row: Dict[str, Any], category_id: Optional[int]) -> Product:
    """Legt ein Produkt an oder überschreibt die Felder eines bestehenden."""
    values = _normalize(row)
    p = db.get(Product, product_id)
    if p is None:
        p = Product(product_id=product_id, category_id=category_id, **values)
        db.add(p)
    else:
        for k, v in values.items():
            setattr(p, k, v)
        p.category_id = category_id
    db.flush()
    return p

