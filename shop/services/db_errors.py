"""Classify store exceptions into the API's failure kinds."""

import logging
from typing import NoReturn

from sqlalchemy.exc import IntegrityError

from shop.core.exceptions import DuplicateEntity, InternalFailure

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation in PostgreSQL.
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: BaseException) -> bool:
    """True if exc is a store-reported uniqueness conflict."""
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    code = getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    # Drivers without SQLSTATE (e.g. sqlite3) only report it in the message.
    return "unique" in str(orig).lower()


def conflict_detail(exc: IntegrityError) -> str:
    """Store's conflict detail, e.g. 'Key (email)=(a@b.com) already exists.'"""
    diag = getattr(exc.orig, "diag", None)
    detail = getattr(diag, "message_detail", None)
    if detail:
        return detail
    return f"Key already exists: {exc.orig}"


def raise_store_error(
    exc: Exception,
    duplicate: type[DuplicateEntity] = DuplicateEntity,
) -> NoReturn:
    """
    Re-raise a store failure as DuplicateEntity (client error with the store's
    detail) or InternalFailure (logged, static message).
    """
    if is_unique_violation(exc):
        raise duplicate(conflict_detail(exc)) from exc
    logger.error("Unexpected store error: %s", exc, exc_info=exc)
    raise InternalFailure() from exc
