"""Pydantic request/response schemas."""

from shop.schemas.auth import (
    AuthResponse,
    CreateUserRequest,
    LoginRequest,
    PrivateRouteResponse,
    RoleCheckResponse,
    UserPublic,
)
from shop.schemas.files import FileUploadResponse
from shop.schemas.health import HealthResponse
from shop.schemas.products import (
    CreateProductRequest,
    DeleteProductResponse,
    PaginationParams,
    ProductResponse,
    UpdateProductRequest,
)

__all__ = [
    "AuthResponse",
    "CreateProductRequest",
    "CreateUserRequest",
    "DeleteProductResponse",
    "FileUploadResponse",
    "HealthResponse",
    "LoginRequest",
    "PaginationParams",
    "PrivateRouteResponse",
    "ProductResponse",
    "RoleCheckResponse",
    "UpdateProductRequest",
    "UserPublic",
]
