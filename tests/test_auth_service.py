"""Tests for shop.services.auth: register, login, check_status and principal resolution."""

import unittest
import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from shop.core.exceptions import (
    DuplicateCredential,
    InternalFailure,
    InvalidCredentials,
    TokenInvalid,
)
from shop.core.security import decode_access_token, hash_password, verify_password
from shop.repositories.users import UserRepository
from shop.schemas.auth import CreateUserRequest, LoginRequest
from shop.services.auth import check_status, login, register, resolve_principal
from tests.support import DEFAULT_PASSWORD, add_user, make_session_factory, unique_violation


def _stored_user(**kwargs: object) -> SimpleNamespace:
    defaults = {
        "id": uuid.UUID("a3904b9b-de5d-4e11-89a3-d1f42eaca4eb"),
        "email": "karlee@example.com",
        "full_name": "Karlee Schamberger",
        "password": hash_password(DEFAULT_PASSWORD),
        "is_active": True,
        "roles": ["user"],
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _register_body(email: str = "a@b.com") -> CreateUserRequest:
    return CreateUserRequest(email=email, password=DEFAULT_PASSWORD, fullName="A B")


class TestRegisterWithMockStore(unittest.TestCase):
    """register classifies store failures and makes exactly one insert attempt."""

    def test_success_returns_session_without_password(self) -> None:
        users = MagicMock()
        users.insert.side_effect = lambda user: _stored_user(
            email=user.email, full_name=user.full_name, password=user.password
        )
        result = register(users, _register_body())
        users.insert.assert_called_once()
        inserted = users.insert.call_args.args[0]
        self.assertNotEqual(inserted.password, DEFAULT_PASSWORD)
        self.assertTrue(verify_password(DEFAULT_PASSWORD, inserted.password))
        self.assertNotIn("password", result.user.model_dump(by_alias=True))
        self.assertEqual(decode_access_token(result.token), str(result.user.id))

    def test_unique_violation_raises_duplicate_credential(self) -> None:
        users = MagicMock()
        users.insert.side_effect = unique_violation("Key (email)=(a@b.com) already exists.")
        with self.assertRaises(DuplicateCredential) as ctx:
            register(users, _register_body())
        self.assertEqual(ctx.exception.message, "Key (email)=(a@b.com) already exists.")
        self.assertEqual(ctx.exception.status_code, 400)
        users.insert.assert_called_once()

    def test_other_store_error_raises_internal_failure(self) -> None:
        users = MagicMock()
        users.insert.side_effect = RuntimeError("Unexpected error")
        with self.assertRaises(InternalFailure) as ctx:
            register(users, _register_body())
        self.assertEqual(ctx.exception.message, "Unexpected error, check server logs")
        users.insert.assert_called_once()


class TestRegisterWithDatabase(unittest.TestCase):
    """register against a real session: defaults, normalization and the unique email index."""

    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.users = UserRepository(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_defaults_applied(self) -> None:
        result = register(self.users, _register_body())
        self.assertEqual(result.user.roles, ["user"])
        self.assertTrue(result.user.is_active)
        self.assertEqual(result.user.email, "a@b.com")
        self.assertTrue(result.token)

    def test_second_registration_with_same_email_fails(self) -> None:
        register(self.users, _register_body())
        with self.assertRaises(DuplicateCredential) as ctx:
            register(self.users, _register_body())
        self.assertIn("already exists", ctx.exception.message)

    def test_email_uniqueness_ignores_case(self) -> None:
        register(self.users, _register_body("a@b.com"))
        with self.assertRaises(DuplicateCredential):
            register(self.users, _register_body("A@B.COM"))


class TestLogin(unittest.TestCase):

    def test_valid_credentials_return_session(self) -> None:
        users = MagicMock()
        users.get_by_email.return_value = _stored_user()
        result = login(users, LoginRequest(email="karlee@example.com", password=DEFAULT_PASSWORD))
        self.assertEqual(result.user.full_name, "Karlee Schamberger")
        self.assertTrue(result.token)
        users.get_by_email.assert_called_once_with("karlee@example.com")

    def test_unknown_email(self) -> None:
        users = MagicMock()
        users.get_by_email.return_value = None
        with self.assertRaises(InvalidCredentials) as ctx:
            login(users, LoginRequest(email="karlee@example.com", password=DEFAULT_PASSWORD))
        self.assertEqual(ctx.exception.message, "Credentials are not valid (email)")
        self.assertEqual(ctx.exception.factor, "email")

    def test_wrong_password(self) -> None:
        users = MagicMock()
        users.get_by_email.return_value = _stored_user()
        with self.assertRaises(InvalidCredentials) as ctx:
            login(users, LoginRequest(email="karlee@example.com", password="Other123"))
        self.assertEqual(ctx.exception.message, "Credentials are not valid (password)")

    def test_both_failures_share_status(self) -> None:
        self.assertEqual(InvalidCredentials("email").status_code, InvalidCredentials("password").status_code)

    def test_inactive_user_can_still_log_in(self) -> None:
        users = MagicMock()
        users.get_by_email.return_value = _stored_user(is_active=False)
        result = login(users, LoginRequest(email="karlee@example.com", password=DEFAULT_PASSWORD))
        self.assertFalse(result.user.is_active)

    def test_store_failure_raises_internal_failure(self) -> None:
        users = MagicMock()
        users.get_by_email.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with self.assertRaises(InternalFailure):
            login(users, LoginRequest(email="karlee@example.com", password=DEFAULT_PASSWORD))


class TestCheckStatus(unittest.TestCase):
    """check_status refreshes the token and keeps the projection."""

    def test_new_token_same_user(self) -> None:
        user = _stored_user()
        first = check_status(user)
        second = check_status(user)
        self.assertNotEqual(first.token, second.token)
        self.assertEqual(first.user, second.user)


class TestResolvePrincipal(unittest.TestCase):

    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.users = UserRepository(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_active_user_resolves(self) -> None:
        user = add_user(self.db)
        self.assertEqual(resolve_principal(self.users, str(user.id)).email, "a@b.com")

    def test_unknown_subject(self) -> None:
        with self.assertRaises(TokenInvalid) as ctx:
            resolve_principal(self.users, str(uuid.uuid4()))
        self.assertEqual(ctx.exception.message, "Token not valid")

    def test_non_uuid_subject(self) -> None:
        with self.assertRaises(TokenInvalid):
            resolve_principal(self.users, "mock_user_id")

    def test_inactive_user(self) -> None:
        user = add_user(self.db, is_active=False)
        with self.assertRaises(TokenInvalid) as ctx:
            resolve_principal(self.users, str(user.id))
        self.assertEqual(ctx.exception.message, "User is inactive, talk with an admin")

    def test_deactivation_applies_immediately(self) -> None:
        user = add_user(self.db)
        resolve_principal(self.users, str(user.id))
        user.is_active = False
        self.users.update(user)
        with self.assertRaises(TokenInvalid):
            resolve_principal(self.users, str(user.id))


if __name__ == "__main__":
    unittest.main()
