"""
Catalog API — Category Schemas
================================

What:  Request payloads and response projections for categories.

Reference shape:
    Wherever a client points at a category (a category's parent, a product's
    categories) it sends `{"id": "<uuid>", "name": "<optional>"}`. Only `id`
    is used; `name` is accepted so clients can echo back records they fetched.
    The id is kept as a plain string here: malformed ids are reported by the
    services with the catalog's own messages, not as schema errors.
"""

import uuid
from typing import Literal, Optional

from pydantic import BaseModel, Field


class CategoryReference(BaseModel):
    """A pointer to an existing category."""
    id: str
    name: Optional[str] = None


class CategoryCreate(BaseModel):
    """Body of POST /category."""
    name: str = Field(min_length=1, max_length=255)
    parent: Optional[CategoryReference] = None


class CategoryRecord(BaseModel):
    """
    A category as stored: its parent stays a bare identifier.

    Used for resolved references (a category's parent, a product's
    categories), which are resolved exactly one level deep.
    """
    id: uuid.UUID
    name: str
    parent_id: Optional[uuid.UUID] = None

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    """
    What:  A category with its parent reference resolved to the full record.
    Who:   GET /category, GET /category/{id}, POST /category.
    """
    id: uuid.UUID
    name: str
    parent: Optional[CategoryRecord] = None

    model_config = {"from_attributes": True}


class CategoryCreatedResponse(BaseModel):
    """201 body of POST /category."""
    status: Literal["success"] = "success"
    data: CategoryResponse
