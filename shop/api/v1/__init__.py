"""API v1 routes."""

from fastapi import APIRouter

from shop.api.v1 import auth, files, health, products

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(files.router, prefix="/files", tags=["files"])
