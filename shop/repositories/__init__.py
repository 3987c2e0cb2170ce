"""Persistence layer: all SQLAlchemy queries live behind these repositories."""

from shop.repositories.products import ProductRepository
from shop.repositories.users import UserRepository

__all__ = ["ProductRepository", "UserRepository"]
