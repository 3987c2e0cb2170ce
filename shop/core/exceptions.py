"""Typed failures raised by services and rendered as HTTP errors by the app."""

INTERNAL_FAILURE_MESSAGE = "Unexpected error, check server logs"


class ShopError(Exception):
    """Base class for every failure the API reports to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailure(ShopError):
    """Malformed or missing input that passed schema validation but is still unusable."""

    status_code = 400


class DuplicateEntity(ShopError):
    """Store reported a uniqueness conflict; message carries the store's detail."""

    status_code = 400


class DuplicateCredential(DuplicateEntity):
    """Registration hit the unique email constraint."""


class InvalidCredentials(ShopError):
    """Login failed on the given factor ('email' or 'password')."""

    status_code = 401

    def __init__(self, factor: str) -> None:
        self.factor = factor
        super().__init__(f"Credentials are not valid ({factor})")


class TokenInvalid(ShopError):
    """Bearer token could not be turned into an active principal."""

    status_code = 401


class InvalidToken(TokenInvalid):
    """Signature, structure or expiry check failed while decoding a token."""


class MissingPrincipal(ShopError):
    """Role check ran without an authenticated principal."""

    status_code = 400

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class InsufficientRole(ShopError):
    """Principal holds none of the roles the route requires."""

    status_code = 403


class NotFound(ShopError):
    status_code = 404


class InternalFailure(ShopError):
    """Unexpected store or downstream failure. Detail is logged, never echoed."""

    status_code = 500

    def __init__(self, message: str = INTERNAL_FAILURE_MESSAGE) -> None:
        super().__init__(message)
