"""Shared helpers for tests: in-memory SQLite sessions and builders."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shop.core.database import get_db
from shop.core.security import create_access_token, hash_password
from shop.main import app
from shop.models import Base, User

DEFAULT_PASSWORD = "Secret123"


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with all tables, shared across threads (TestClient)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    db: Session,
    email: str = "a@b.com",
    password: str = DEFAULT_PASSWORD,
    full_name: str = "A B",
    roles: list[str] | None = None,
    is_active: bool = True,
) -> User:
    user = User(
        email=email,
        password=hash_password(password),
        full_name=full_name,
        roles=roles or ["user"],
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def unique_violation(detail: str = "Key (email)=(a@b.com) already exists.") -> IntegrityError:
    """IntegrityError shaped like psycopg2's unique_violation (SQLSTATE 23505)."""
    orig = MagicMock()
    orig.pgcode = "23505"
    orig.diag.message_detail = detail
    return IntegrityError("INSERT INTO ...", {}, orig)


def principal(full_name: str = "Test User", roles: list[str] | None = None) -> SimpleNamespace:
    return SimpleNamespace(full_name=full_name, roles=roles if roles is not None else ["admin"])


class ApiTestCase(unittest.TestCase):
    """TestClient over the app with get_db bound to a fresh in-memory database."""

    def setUp(self) -> None:
        self.session_factory = make_session_factory()

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.db = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        app.dependency_overrides.clear()

    def add_user(self, **kwargs: object) -> User:
        return add_user(self.db, **kwargs)

    @staticmethod
    def bearer(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(sub=user.id)}"}
