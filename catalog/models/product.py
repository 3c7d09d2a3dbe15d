from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, Float, ForeignKey
from catalog.models.base import Base
from catalog.models.category import Category


class Product(Base):
    __tablename__ = "product"

    product_id:          Mapped[str] = mapped_column(String(64), primary_key=True)
    product_name:        Mapped[str] = mapped_column(Text)
    discounted_price:    Mapped[float] = mapped_column(Float, default=0.0)
    actual_price:        Mapped[float] = mapped_column(Float, default=0.0)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0.0)
    rating:              Mapped[float] = mapped_column(Float, default=0.0)
    rating_count:        Mapped[int] = mapped_column(Integer, default=0)
    about_product:       Mapped[str | None] = mapped_column(Text, nullable=True)
    img_link:            Mapped[str | None] = mapped_column(Text, nullable=True)
    product_link:        Mapped[str | None] = mapped_column(Text, nullable=True)

    # Blatt-Kategorie aus dem Import
    category_id: Mapped[int | None] = mapped_column(ForeignKey("category.id"), nullable=True, index=True)
    category:    Mapped[Category | None] = relationship(Category)

    def __repr__(self) -> str:
        return f"<Product {self.product_id}>"
