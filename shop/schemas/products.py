"""Request/response schemas for product endpoints."""

import uuid
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from shop.models.product import Product
from shop.schemas.auth import UserPublic

Gender = Literal["men", "women", "kid", "unisex"]

MAX_PAGE_LIMIT = 100
# Largest offset a Postgres BIGINT bind accepts.
MAX_PAGE_OFFSET = 2**63 - 1

# description and images may be sent as null; every other field maps to a NOT NULL column.
NON_NULLABLE_UPDATE_FIELDS = ("title", "price", "slug", "stock", "sizes", "gender", "tags")


class CreateProductRequest(BaseModel):
    """New product. images are bare filenames or URLs, stored in the given order."""

    title: str = Field(..., min_length=1)
    price: float | None = Field(default=None, gt=0)
    description: str | None = None
    slug: str | None = Field(default=None, min_length=1)
    stock: int | None = Field(default=None, gt=0)
    sizes: list[str]
    gender: Gender
    tags: list[str] | None = None
    images: list[str] | None = None


class UpdateProductRequest(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    title: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, gt=0)
    description: str | None = None
    slug: str | None = Field(default=None, min_length=1)
    stock: int | None = Field(default=None, gt=0)
    sizes: list[str] | None = None
    gender: Gender | None = None
    tags: list[str] | None = None
    images: list[str] | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "UpdateProductRequest":
        nulled = [
            name
            for name in NON_NULLABLE_UPDATE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Fields must not be null: {', '.join(nulled)}")
        return self


class PaginationParams(BaseModel):
    limit: int = Field(default=10, gt=0, le=MAX_PAGE_LIMIT)
    offset: int = Field(default=0, ge=0, le=MAX_PAGE_OFFSET)
    gender: Gender | None = None


class ProductResponse(BaseModel):
    """Plain projection: images flattened to URL strings, owner without password."""

    id: uuid.UUID
    title: str
    price: float
    description: str | None = None
    slug: str
    stock: int
    sizes: list[str]
    gender: str
    tags: list[str]
    images: list[str]
    user: UserPublic | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            title=product.title,
            price=product.price,
            description=product.description,
            slug=product.slug,
            stock=product.stock,
            sizes=list(product.sizes or []),
            gender=product.gender,
            tags=list(product.tags or []),
            images=[image.url for image in product.images],
            user=UserPublic.from_user(product.user) if product.user is not None else None,
        )


class DeleteProductResponse(BaseModel):
    ok: bool = True
