"""Credential store: user lookups and writes."""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop.models.user import User


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    """User persistence on a request-scoped session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == normalize_email(email))
        return self.session.scalars(stmt).first()

    def insert(self, user: User) -> User:
        """
        Insert and commit a new user; rolls back and re-raises on any store error
        (IntegrityError for a duplicate email).
        """
        user.email = normalize_email(user.email)
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def update(self, user: User) -> User:
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user
