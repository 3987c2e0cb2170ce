"""Role guard: decide whether a principal may reach a route."""

from collections.abc import Collection
from typing import Protocol

from shop.core.exceptions import InsufficientRole, MissingPrincipal


class Principal(Protocol):
    full_name: str
    roles: list[str]


def can_access(
    required_roles: Collection[str] | None,
    principal: Principal | None,
) -> bool:
    """
    Return True when the route is open or the principal holds a required role.

    - No required roles (None or empty): allowed for anyone.
    - Required roles but no principal: MissingPrincipal (guard ran before auth).
    - Principal without any of the required roles: InsufficientRole.
    """
    if not required_roles:
        return True
    if principal is None:
        raise MissingPrincipal("User not found")
    if any(role in required_roles for role in (principal.roles or [])):
        return True
    raise InsufficientRole(
        f"User {principal.full_name} need a valid role: [{','.join(required_roles)}]"
    )
