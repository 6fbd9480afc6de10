"""
Catalog API — Product SQLAlchemy Model
========================================

What:  ORM model representing the `products` table and its category links.
Who:   Used by ProductService for CRUD operations and by the seed command.

Table Design:
    - name is unique across all products
    - price is a non-negative number, qty a non-negative integer; both are
      guarded by CHECK constraints as well as by the input schema
    - categories is a many-to-many set stored in `product_categories`.
      The composite primary key (product_id, category_id) makes a repeated
      category reference impossible at the storage level; the foreign key to
      `categories` rejects references to categories that do not exist.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.database import Base
from catalog_api.models.category import Category


# ── Association Table ─────────────────────────────────────────────────────
# Deleting a product removes its links; a category that is still referenced
# by a product cannot be deleted (RESTRICT)
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column(
        "product_id",
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Uuid,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


class Product(Base):
    """
    A catalog product.

    Lifecycle:
        1. Created via POST /product after validation and reference checks
        2. Partially updated via PATCH /product/{id} (only supplied fields change)
        3. Hard-deleted via DELETE /product/{id}
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Product display name, unique across the catalog",
    )

    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Unit price, never negative",
    )

    qty: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Units per sale (e.g. 8 pieces of temaki), never negative",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    categories: Mapped[List[Category]] = relationship(
        secondary=product_categories,
        lazy="raise",
        order_by=Category.created_at,
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("qty >= 0", name="ck_products_qty_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, qty={self.qty})>"
