"""Auth service: registration, login, session refresh and principal resolution."""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from shop.core.exceptions import (
    DuplicateCredential,
    InternalFailure,
    InvalidCredentials,
    TokenInvalid,
)
from shop.core.security import create_access_token, hash_password, verify_password
from shop.models.user import User
from shop.repositories.users import UserRepository
from shop.schemas.auth import AuthResponse, CreateUserRequest, LoginRequest, UserPublic
from shop.services.db_errors import raise_store_error

logger = logging.getLogger(__name__)


def _session_for(user: User) -> AuthResponse:
    return AuthResponse(
        user=UserPublic.from_user(user),
        token=create_access_token(sub=user.id),
    )


def register(users: UserRepository, body: CreateUserRequest) -> AuthResponse:
    """
    Create a user and return a session for it.

    Exactly one insert attempt. A duplicate email raises DuplicateCredential with
    the store's detail; any other store failure raises InternalFailure.
    """
    user = User(
        email=body.email,
        password=hash_password(body.password),
        full_name=body.full_name,
    )
    try:
        user = users.insert(user)
    except Exception as e:
        raise_store_error(e, duplicate=DuplicateCredential)
    logger.info("User registered: id=%s", user.id)
    return _session_for(user)


def login(users: UserRepository, body: LoginRequest) -> AuthResponse:
    """
    Check email + password and return a fresh session.

    Does not look at is_active; inactive users are rejected on their next
    authenticated request by resolve_principal.
    """
    try:
        user = users.get_by_email(body.email)
    except SQLAlchemyError as e:
        logger.exception("User lookup failed during login")
        raise InternalFailure() from e
    if user is None:
        raise InvalidCredentials("email")
    if not verify_password(body.password, user.password):
        raise InvalidCredentials("password")
    return _session_for(user)


def check_status(principal: User) -> AuthResponse:
    """Issue a new token for an already authenticated principal. No writes."""
    return _session_for(principal)


def resolve_principal(users: UserRepository, subject: str) -> User:
    """
    Turn a validated token subject into the live user record.

    Runs on every authenticated request so role and active-flag changes apply
    immediately, whatever tokens are still outstanding.
    """
    try:
        user_id = uuid.UUID(subject)
    except ValueError as e:
        raise TokenInvalid("Token not valid") from e
    try:
        user = users.get_by_id(user_id)
    except SQLAlchemyError as e:
        logger.exception("User lookup failed while resolving principal")
        raise InternalFailure() from e
    if user is None:
        raise TokenInvalid("Token not valid")
    if not user.is_active:
        raise TokenInvalid("User is inactive, talk with an admin")
    return user
