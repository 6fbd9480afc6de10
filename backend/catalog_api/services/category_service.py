"""
Catalog API — Category Service
================================

What:  List, fetch and create categories.
Who:   Called by the /category route handlers; ProductService reuses
       `find_by_ids` to resolve product category references.

Create Flow (POST /category):
    ┌──────────┐   ┌────────────┐   ┌──────────────┐   ┌──────────┐
    │ Schema   │──▶│ Name taken?│──▶│ Parent valid │──▶│ Insert   │
    │ (route)  │   │   → 409    │   │ 400 / 404    │   │ → 201    │
    └──────────┘   └────────────┘   └──────────────┘   └──────────┘

    The name pre-check keeps the error order stable; the unique index on
    categories.name catches a concurrent create that slips between the
    check and the insert (IntegrityError → 409).
"""

import logging
import uuid
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.exceptions import ConflictError, DatabaseError, NotFoundError
from catalog_api.models.category import Category
from catalog_api.schemas.category import CategoryCreate, CategoryResponse
from catalog_api.services.identifiers import parse_id

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Business logic layer for category operations.

    Stateless: the session is passed into every call, so one instance is
    shared by all requests.
    """

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """All categories, oldest first, each with its parent resolved."""
        try:
            result = await db.execute(
                select(Category)
                .options(selectinload(Category.parent))
                .order_by(Category.created_at, Category.name)
            )
            return [CategoryResponse.model_validate(c) for c in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_category(self, db: AsyncSession, category_id: str) -> CategoryResponse:
        """
        Retrieve a single category with its parent resolved.

        Raises:
            ValidationError: `category_id` is malformed (→ 400)
            NotFoundError: No category with that id (→ 404)
        """
        parsed_id = parse_id(category_id)
        try:
            category = await self._load(db, parsed_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the category. Please try again.",
                context={"category_id": category_id},
            )

        if category is None:
            raise NotFoundError(resource="Category", resource_id=str(parsed_id))
        return CategoryResponse.model_validate(category)

    async def create_category(
        self, db: AsyncSession, payload: CategoryCreate
    ) -> CategoryResponse:
        """
        Create a category, optionally under an existing parent.

        Raises:
            ConflictError: The name is already used (→ 409)
            ValidationError: The parent id is malformed (→ 400)
            NotFoundError: The parent does not exist (→ 404)
            DatabaseError: The store failed (→ 500)
        """
        try:
            if await self._name_taken(db, payload.name):
                logger.warning("Category name already exists: %s", payload.name)
                raise ConflictError(resource="Category")

            parent_id: Optional[uuid.UUID] = None
            if payload.parent is not None:
                parent_id = parse_id(payload.parent.id, field="parent")
                if await db.get(Category, parent_id) is None:
                    raise NotFoundError(
                        resource="Parent Category", resource_id=str(parent_id)
                    )

            category = Category(name=payload.name, parent_id=parent_id)
            db.add(category)
            await db.flush()
            logger.info("Category created: %s (%s)", category.id, category.name)

            created = await self._load(db, category.id)
            return CategoryResponse.model_validate(created)

        except IntegrityError as e:
            logger.warning("Category insert rejected by constraint: %s", str(e.orig))
            raise ConflictError(resource="Category")
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the category. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def find_by_ids(
        self, db: AsyncSession, ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, Category]:
        """Fetches the categories among `ids` that exist, keyed by id."""
        id_list = list(ids)
        if not id_list:
            return {}
        result = await db.execute(select(Category).where(Category.id.in_(id_list)))
        return {c.id: c for c in result.scalars().all()}

    async def _name_taken(self, db: AsyncSession, name: str) -> bool:
        result = await db.execute(select(Category.id).where(Category.name == name))
        return result.first() is not None

    async def _load(self, db: AsyncSession, category_id: uuid.UUID) -> Optional[Category]:
        # populate_existing: a category created earlier in this session is
        # already in the identity map without its parent loaded
        result = await db.execute(
            select(Category)
            .options(selectinload(Category.parent))
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
