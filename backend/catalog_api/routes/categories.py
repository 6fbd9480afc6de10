"""
Catalog API — Category Route Handlers
=======================================

What:  GET /category, GET /category/{id}, POST /category.
How:   Thin handlers: the guard runs first (TokenGuardedRoute), then the
       body is validated, then CategoryService does the work.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db_session
from catalog_api.dependencies import TokenGuardedRoute, require_token
from catalog_api.schemas.category import (
    CategoryCreate,
    CategoryCreatedResponse,
    CategoryResponse,
)
from catalog_api.schemas.common import ErrorResponse
from catalog_api.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/category",
    tags=["Categories"],
    route_class=TokenGuardedRoute,
    dependencies=[Depends(require_token)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=List[CategoryResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List categories",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    """Every category, each with its parent resolved one level deep."""
    return await category_service.list_categories(db)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    summary="Get a category by ID",
)
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.get_category(db, category_id)


@router.post(
    "",
    status_code=201,
    response_model=CategoryCreatedResponse,
    responses={
        400: {"description": "Invalid payload or parent id", "model": ErrorResponse},
        404: {"description": "Parent category not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryCreatedResponse:
    category = await category_service.create_category(db, payload)
    return CategoryCreatedResponse(data=category)
