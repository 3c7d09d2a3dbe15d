# catalog/models/category.py
from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint, Index, text
from catalog.models.base import Base

NAME_MAX_LENGTH = 255


class Category(Base):
    __tablename__ = "category"

    id:        Mapped[int]  = mapped_column(Integer, primary_key=True, autoincrement=True)
    name:      Mapped[str]  = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("category.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("parent_id", "name", name="uq_cat_parent_name"),
        # NULL ist in UNIQUE nie gleich NULL -> Wurzeln separat absichern
        Index(
            "uq_cat_root_name",
            "name",
            unique=True,
            sqlite_where=text("parent_id IS NULL"),
            postgresql_where=text("parent_id IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Category {self.id}:{self.name} parent={self.parent_id}>"
