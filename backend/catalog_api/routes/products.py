"""
Catalog API — Product Route Handlers
======================================

What:  GET/POST /product and GET/PATCH/DELETE /product/{id}.
How:   Guard (TokenGuardedRoute, before the body is read) → body validation
       → ProductService.

Delete responses:
    200 {"status": "success", "message": "Product Deleted Successfully"}
    204 (empty body) when there was no such product
    404 when the id is malformed
"""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db_session
from catalog_api.dependencies import TokenGuardedRoute, require_token
from catalog_api.schemas.common import ErrorResponse, StatusMessage
from catalog_api.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ProductWrittenResponse,
)
from catalog_api.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/product",
    tags=["Products"],
    route_class=TokenGuardedRoute,
    dependencies=[Depends(require_token)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List products",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    """Every product with its categories resolved to full records."""
    return await product_service.list_products(db)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Get a product by ID",
)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get_product(db, product_id)


@router.post(
    "",
    status_code=201,
    response_model=ProductWrittenResponse,
    responses={
        400: {"description": "Invalid payload or category ids", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductWrittenResponse:
    product = await product_service.create_product(db, payload)
    return ProductWrittenResponse(data=product)


@router.patch(
    "/{product_id}",
    response_model=ProductWrittenResponse,
    responses={
        400: {"description": "Empty or invalid payload, malformed id", "model": ErrorResponse},
        404: {"description": "Product or category not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Partially update a product",
)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductWrittenResponse:
    """Only the fields present in the body change."""
    product = await product_service.update_product(db, product_id, payload)
    return ProductWrittenResponse(data=product)


@router.delete(
    "/{product_id}",
    response_model=StatusMessage,
    responses={
        204: {"description": "No such product; nothing was deleted"},
        404: {"description": "Malformed id", "model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Union[StatusMessage, Response]:
    deleted = await product_service.delete_product(db, product_id)
    if not deleted:
        return Response(status_code=204)
    return StatusMessage(status="success", message="Product Deleted Successfully")
