from catalog.models.base import Base
from catalog.models.category import Category
from catalog.models.product import Product

__all__ = ["Base", "Category", "Product"]
