"""SQLAlchemy ORM models."""

from shop.models.base import Base
from shop.models.product import Product, ProductImage
from shop.models.user import User

__all__ = ["Base", "Product", "ProductImage", "User"]
