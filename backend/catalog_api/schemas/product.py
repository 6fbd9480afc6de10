"""
Catalog API — Product Schemas
===============================

What:  Request payloads and response projections for products.

ProductCreate vs ProductUpdate:
    Create requires every field; update accepts any subset (merge semantics).
    An update body that supplies nothing is not a schema error: the service
    rejects it with its own "at least one field" message.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from catalog_api.schemas.category import CategoryRecord, CategoryReference


class ProductCreate(BaseModel):
    """
    Body of POST /product.

    categories: at least one reference; duplicates are allowed here and
    collapsed by the service before storage.
    """
    name: str = Field(min_length=1, max_length=255)
    qty: int = Field(ge=0, strict=True)
    price: float = Field(ge=0, allow_inf_nan=False)
    categories: List[CategoryReference] = Field(min_length=1)


class ProductUpdate(BaseModel):
    """Body of PATCH /product/{id}. Every field is optional."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    qty: Optional[int] = Field(default=None, ge=0, strict=True)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    categories: Optional[List[CategoryReference]] = Field(default=None, min_length=1)

    def supplied_fields(self) -> Dict[str, Any]:
        """Fields the client actually sent with a non-null value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ProductResponse(BaseModel):
    """
    What:  A product with its category references resolved to full records.
    Who:   GET /product, GET /product/{id}, and the write endpoints' `data`.
    """
    id: uuid.UUID
    name: str
    price: float
    qty: int
    categories: List[CategoryRecord]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductWrittenResponse(BaseModel):
    """Body of POST /product (201) and PATCH /product/{id} (200)."""
    status: Literal["success"] = "success"
    data: ProductResponse
