"""
Catalog API — ORM Models
==========================

Importing this package registers every table with `Base.metadata`
(Alembic autogenerate and `database.create_all` rely on that).
"""

from catalog_api.models.user import User
from catalog_api.models.category import Category
from catalog_api.models.product import Product, product_categories

__all__ = ["User", "Category", "Product", "product_categories"]
