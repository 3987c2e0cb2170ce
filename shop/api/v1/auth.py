"""Auth routes (register, login, check-status, role-gated samples) and auth dependencies."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shop.api.v1.deps import get_user_repository
from shop.core.exceptions import TokenInvalid
from shop.core.security import decode_access_token
from shop.models.user import ROLE_ADMIN, ROLE_SUPER_USER, Role, User
from shop.repositories.users import UserRepository
from shop.schemas.auth import (
    AuthResponse,
    CreateUserRequest,
    LoginRequest,
    PrivateRouteResponse,
    RoleCheckResponse,
    UserPublic,
)
from shop.services import auth as auth_service
from shop.services.role_guard import can_access

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> User:
    """Dependency: require a valid Bearer JWT and return the live user. Raises 401 otherwise."""
    if credentials is None:
        raise TokenInvalid("Not authenticated")
    subject = decode_access_token(credentials.credentials)
    return auth_service.resolve_principal(users, subject)


def require_roles(*roles: Role) -> Callable[..., User]:
    """
    Dependency factory: authenticate, then check the principal against roles.

    The roles are bound here, when the route is declared; no roles means any
    authenticated user.
    """
    required = tuple(roles)

    def dependency(user: Annotated[User, Depends(get_current_user)]) -> User:
        can_access(required, user)
        return user

    return dependency


require_admin = require_roles(ROLE_ADMIN)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: CreateUserRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthResponse:
    """Create an account and return it with a JWT. 400 if the email is already registered."""
    return auth_service.register(users, body)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns the user and a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    return auth_service.login(users, body)


@router.get("/check-status", response_model=AuthResponse)
def check_status(
    user: Annotated[User, Depends(require_roles())],
) -> AuthResponse:
    """Return the current user with a newly issued token."""
    return auth_service.check_status(user)


@router.get("/private", response_model=PrivateRouteResponse)
def private_route(
    request: Request,
    user: Annotated[User, Depends(get_current_user)],
) -> PrivateRouteResponse:
    """Any authenticated user. Echoes the principal and the request headers."""
    raw_headers: list[str] = []
    for name, value in request.headers.raw:
        raw_headers.extend((name.decode("latin-1"), value.decode("latin-1")))
    return PrivateRouteResponse(
        message="Hola Mundo Private",
        user=UserPublic.from_user(user),
        user_email=user.email,
        raw_headers=raw_headers,
        headers=dict(request.headers),
    )


@router.get("/private2", response_model=RoleCheckResponse)
def private_route2(
    user: Annotated[User, Depends(require_roles(ROLE_SUPER_USER, ROLE_ADMIN))],
) -> RoleCheckResponse:
    """Users with role super-user or admin."""
    return RoleCheckResponse(user=UserPublic.from_user(user))


@router.get("/private3", response_model=RoleCheckResponse)
def private_route3(
    user: Annotated[User, Depends(require_admin)],
) -> RoleCheckResponse:
    """Admins only."""
    return RoleCheckResponse(user=UserPublic.from_user(user))
