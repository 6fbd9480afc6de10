"""
Catalog API — Category SQLAlchemy Model
=========================================

What:  ORM model representing the `categories` table.
Who:   Used by CategoryService (CRUD) and ProductService (reference checks).

Table Design:
    - name is unique across all categories
    - parent_id is a nullable self-reference stored as a bare identifier.
      The `parent` relationship is the separate resolution step: it is only
      loaded when a query asks for it (selectinload), never implicitly.
    - No cycle prevention: a category's parent only has to exist at write time

    Example tree (from the seed data):
        Bebidas
        ├── Sucos
        └── Refrigerantes
        Pizzas
        ├── Pizzas Doces
        └── Pizzas Salgadas
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.database import Base


class Category(Base):
    """
    A catalog category, optionally nested under a parent category.

    Query Patterns:
        - List all: SELECT ... ORDER BY created_at, parents loaded with one
          extra IN query (selectinload)
        - Name uniqueness: SELECT ... WHERE name = :name (unique index)
        - Reference check: SELECT id ... WHERE id IN (:ids)
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Category display name, unique across the catalog",
    )

    # ON DELETE SET NULL: removing a parent orphans its children instead of
    # leaving a dangling identifier
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
        comment="Identifier of the parent category, if any",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # lazy="raise": async sessions cannot lazy-load, so every query that
    # needs the parent must request it explicitly
    parent: Mapped[Optional["Category"]] = relationship(
        remote_side=[id],
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_categories_parent_id", "parent_id"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', parent_id={self.parent_id})>"
