"""Product CRUD routes."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from shop.api.v1.auth import require_admin, require_roles
from shop.api.v1.deps import get_product_repository
from shop.models.user import User
from shop.repositories.products import ProductRepository
from shop.schemas.products import (
    MAX_PAGE_LIMIT,
    MAX_PAGE_OFFSET,
    CreateProductRequest,
    DeleteProductResponse,
    Gender,
    PaginationParams,
    ProductResponse,
    UpdateProductRequest,
)
from shop.services import products as product_service

router = APIRouter()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: CreateProductRequest,
    user: Annotated[User, Depends(require_roles())],
    products: Annotated[ProductRepository, Depends(get_product_repository)],
) -> ProductResponse:
    """Create a product owned by the caller. images are stored in the given order."""
    return product_service.create_product(products, body, user)


@router.get("", response_model=list[ProductResponse])
def list_products(
    products: Annotated[ProductRepository, Depends(get_product_repository)],
    limit: Annotated[int, Query(gt=0, le=MAX_PAGE_LIMIT)] = 10,
    offset: Annotated[int, Query(ge=0, le=MAX_PAGE_OFFSET)] = 0,
    gender: Annotated[Gender | None, Query()] = None,
) -> list[ProductResponse]:
    """Paginated product listing, optionally filtered by gender."""
    pagination = PaginationParams(limit=limit, offset=offset, gender=gender)
    return product_service.find_all(products, pagination)


@router.get("/{term}", response_model=ProductResponse)
def get_product(
    term: str,
    products: Annotated[ProductRepository, Depends(get_product_repository)],
) -> ProductResponse:
    """Look up a product by id, slug or title (case-insensitive)."""
    return product_service.find_one_plain(products, term)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: uuid.UUID,
    body: UpdateProductRequest,
    user: Annotated[User, Depends(require_admin)],
    products: Annotated[ProductRepository, Depends(get_product_repository)],
) -> ProductResponse:
    """
    Partially update a product (admin only).

    When images is present the product's images are replaced by exactly that
    list; the replacement and the field changes commit together or not at all.
    """
    return product_service.update_product(products, product_id, body, user)


@router.delete("/{product_id}", response_model=DeleteProductResponse)
def delete_product(
    product_id: uuid.UUID,
    _admin: Annotated[User, Depends(require_admin)],
    products: Annotated[ProductRepository, Depends(get_product_repository)],
) -> DeleteProductResponse:
    """Delete a product and its images (admin only)."""
    product_service.remove_product(products, str(product_id))
    return DeleteProductResponse()
