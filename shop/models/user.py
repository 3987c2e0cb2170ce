"""ORM model for application users (auth and RBAC)."""

import uuid
from typing import Literal

from sqlalchemy import Boolean, Column, String, Uuid, true
from sqlalchemy.orm import relationship

from shop.models.base import Base, JSONList

Role = Literal["admin", "super-user", "user"]

ROLE_ADMIN = "admin"
ROLE_SUPER_USER = "super-user"
ROLE_USER = "user"
VALID_ROLES = (ROLE_ADMIN, ROLE_SUPER_USER, ROLE_USER)
DEFAULT_ROLES = (ROLE_USER,)


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email is stored lowercased so the unique index is effectively case-insensitive.
    password holds the bcrypt hash only and must never leave the API; see UserPublic.
    roles: any of 'admin', 'super-user', 'user'
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    roles = Column(JSONList, nullable=False, default=lambda: list(DEFAULT_ROLES))

    products = relationship("Product", back_populates="user")
