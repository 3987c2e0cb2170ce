"""Request-scoped repository dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from shop.core.database import get_db
from shop.repositories.products import ProductRepository
from shop.repositories.users import UserRepository


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_product_repository(db: Annotated[Session, Depends(get_db)]) -> ProductRepository:
    return ProductRepository(db)
