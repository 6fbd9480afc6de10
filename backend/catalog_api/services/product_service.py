"""
Catalog API — Product Service
===============================

What:  List, fetch, create, partially update and delete products.
Who:   Called by the /product route handlers.

Create Flow (POST /product):
    1. Schema validation (route layer)        → 400 field errors
    2. Name already used?                     → 409
    3. Deduplicate requested category ids
    4. Any id malformed?                      → 400, every bad id in one response
    5. Any valid id without a category?       → 404, every missing id in one response
    6. Insert product + category links        → 201 with categories resolved

Update Flow (PATCH /product/{id}):
    Empty body → 400, malformed id → 400, absent product → 404, then steps
    2-5 for whichever fields were supplied, then merge and save.

    Known quirk: the name check is global, so renaming a product to the
    name it already has reports 409.

Delete (DELETE /product/{id}):
    Removed → True, absent → False (route answers 204). A malformed id or a
    lookup failure is reported as not found rather than as a bad request.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from catalog_api.models.category import Category
from catalog_api.models.product import Product
from catalog_api.schemas.category import CategoryReference
from catalog_api.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from catalog_api.services.category_service import category_service
from catalog_api.services.identifiers import parse_id, try_parse_id, unique

logger = logging.getLogger(__name__)

EMPTY_UPDATE = "At least one field (name, qty, price, categories) should be sent"
INVALID_CATEGORY_IDS = "Invalid category ID(s)"


class ProductService:
    """
    Business logic layer for product operations.

    Error Handling Strategy:
        Store failures (SQLAlchemyError) are wrapped in DatabaseError so no
        driver detail reaches the client. Constraint violations raised at
        flush time (a concurrent insert with the same name, a category
        deleted between the check and the write) are mapped to the same
        409/404 the pre-checks would have produced.
    """

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """All products, oldest first, with categories resolved."""
        try:
            result = await db.execute(
                select(Product)
                .options(selectinload(Product.categories))
                .order_by(Product.created_at, Product.name)
            )
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        """
        Retrieve a single product with categories resolved.

        Raises:
            ValidationError: `product_id` is malformed (→ 400)
            NotFoundError: No product with that id (→ 404)
        """
        parsed_id = parse_id(product_id)
        try:
            product = await self._load(db, parsed_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product. Please try again.",
                context={"product_id": product_id},
            )

        if product is None:
            raise NotFoundError(resource="Product", resource_id=str(parsed_id))
        return ProductResponse.model_validate(product)

    async def create_product(
        self, db: AsyncSession, payload: ProductCreate
    ) -> ProductResponse:
        """
        Create a product linked to one or more existing categories.

        Raises:
            ConflictError: The name is already used (→ 409)
            ValidationError: Some category ids are malformed (→ 400)
            NotFoundError: Some category ids do not exist (→ 404)
            DatabaseError: The store failed (→ 500)
        """
        try:
            if await self._name_taken(db, payload.name):
                logger.warning("Product name already exists: %s", payload.name)
                raise ConflictError(resource="Product")

            categories = await self._resolve_categories(db, payload.categories)

            product = Product(
                name=payload.name,
                price=payload.price,
                qty=payload.qty,
                categories=categories,
            )
            db.add(product)
            await db.flush()
            logger.info(
                "Product created: %s (%s) in %d categories",
                product.id, product.name, len(categories),
            )

            created = await self._load(db, product.id)
            return ProductResponse.model_validate(created)

        except IntegrityError as e:
            raise self._constraint_error(e)
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the product. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_product(
        self, db: AsyncSession, product_id: str, payload: ProductUpdate
    ) -> ProductResponse:
        """
        Apply a partial update: only the supplied fields change.

        Raises:
            ValidationError: Empty payload, malformed product id, or
                malformed category ids (→ 400)
            NotFoundError: Product or some category ids missing (→ 404)
            ConflictError: The new name is already used (→ 409)
            DatabaseError: The store failed (→ 500)
        """
        changes: Dict[str, Any] = payload.supplied_fields()
        if not changes:
            raise ValidationError(message=EMPTY_UPDATE)

        parsed_id = parse_id(product_id)
        try:
            product = await self._load(db, parsed_id)
            if product is None:
                raise NotFoundError(resource="Product", resource_id=str(parsed_id))

            if "name" in changes and await self._name_taken(db, changes["name"]):
                logger.warning("Product name already exists: %s", changes["name"])
                raise ConflictError(resource="Product")

            if "categories" in changes:
                product.categories = await self._resolve_categories(
                    db, changes["categories"]
                )

            for field in ("name", "price", "qty"):
                if field in changes:
                    setattr(product, field, changes[field])
            # Category-only changes leave the products row untouched, so onupdate never fires
            product.updated_at = datetime.now(timezone.utc)

            await db.flush()
            logger.info("Product %s updated: %s", parsed_id, sorted(changes))

            updated = await self._load(db, parsed_id)
            return ProductResponse.model_validate(updated)

        except IntegrityError as e:
            raise self._constraint_error(e)
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the product. Please try again.",
                context={"product_id": product_id},
            )

    async def delete_product(self, db: AsyncSession, product_id: str) -> bool:
        """
        Hard-delete a product.

        Returns:
            True if a product was removed, False if there was nothing to remove.

        Raises:
            NotFoundError: `product_id` is malformed or the lookup failed.
        """
        parsed_id = try_parse_id(product_id)
        if parsed_id is None:
            raise NotFoundError(resource="Product", context={"value": product_id})

        try:
            product = await self._load(db, parsed_id)
            if product is None:
                logger.info("Delete of absent product %s is a no-op", parsed_id)
                return False

            await db.delete(product)
            await db.flush()
            logger.info("Product deleted: %s (%s)", parsed_id, product.name)
            return True

        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise NotFoundError(resource="Product", resource_id=str(parsed_id))

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _resolve_categories(
        self, db: AsyncSession, references: List[CategoryReference]
    ) -> List[Category]:
        """
        Turn requested category references into Category rows.

        Ids are deduplicated first; malformed ids are all reported together
        (400), then ids that match no category are all reported together (404).
        The returned list follows the order of first appearance.
        """
        positions: Dict[str, int] = {}
        for index, ref in enumerate(references):
            positions.setdefault(ref.id, index)
        raw_ids = unique(ref.id for ref in references)

        parsed: List[uuid.UUID] = []
        invalid: List[Dict[str, Any]] = []
        for raw in raw_ids:
            value = try_parse_id(raw)
            if value is None:
                invalid.append({
                    "field": ["body", "categories", positions[raw], "id"],
                    "message": f"'{raw}' is not a valid ID",
                })
            else:
                parsed.append(value)

        if invalid:
            raise ValidationError(message=INVALID_CATEGORY_IDS, errors=invalid)

        # Two spellings of the same UUID (e.g. upper/lower case) collapse here
        ids = unique(parsed)
        found = await category_service.find_by_ids(db, ids)
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(
                resource="Category",
                errors=[
                    {"field": ["body", "categories"], "message": f"Category '{i}' does not exist"}
                    for i in missing
                ],
                context={"missing": [str(i) for i in missing]},
            )

        return [found[i] for i in ids]

    async def _name_taken(self, db: AsyncSession, name: str) -> bool:
        result = await db.execute(select(Product.id).where(Product.name == name))
        return result.first() is not None

    async def _load(self, db: AsyncSession, product_id: uuid.UUID) -> Optional[Product]:
        result = await db.execute(
            select(Product)
            .options(selectinload(Product.categories))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _constraint_error(exc: IntegrityError) -> Exception:
        """Maps a flush-time constraint violation to the matching client error."""
        detail = str(exc.orig).lower()
        logger.warning("Product write rejected by constraint: %s", detail)
        if "foreign key" in detail:
            return NotFoundError(resource="Category")
        return ConflictError(resource="Product")


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
