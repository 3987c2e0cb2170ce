"""
Create a user (e.g. first admin). Run from project root:
  python -m shop.scripts.create_user EMAIL PASSWORD FULL_NAME [--role ROLE ...]
Example:
  python -m shop.scripts.create_user admin@example.com 'Secret123' 'Shop Admin' --role admin --role user

With --update-roles an existing user's roles are replaced instead.
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from shop.core.database import session_scope
from shop.core.exceptions import ShopError
from shop.models.user import DEFAULT_ROLES, VALID_ROLES
from shop.repositories.users import UserRepository
from shop.schemas.auth import CreateUserRequest
from shop.services.auth import register

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a shop user (or update an existing user's roles).")
    parser.add_argument("email", help="Email address (stored lowercased)")
    parser.add_argument("password", help="Password (6-50 chars, upper, lower and a digit or symbol)")
    parser.add_argument("full_name", help="Full name")
    parser.add_argument(
        "--role",
        action="append",
        choices=VALID_ROLES,
        dest="roles",
        help="Role to grant; repeat for several (default: user)",
    )
    parser.add_argument(
        "--update-roles",
        action="store_true",
        help="If the user exists, replace its roles instead of failing",
    )
    args = parser.parse_args()
    roles = args.roles or list(DEFAULT_ROLES)

    try:
        body = CreateUserRequest(email=args.email, password=args.password, fullName=args.full_name)
    except ValidationError as e:
        for err in e.errors():
            print(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}", file=sys.stderr)
        return 1

    with session_scope() as db:
        users = UserRepository(db)
        existing = users.get_by_email(body.email)
        if existing is not None:
            if not args.update_roles:
                print(f"User '{body.email}' already exists.", file=sys.stderr)
                return 1
            existing.roles = roles
            users.update(existing)
            logger.info("Updated roles of %s to %s", existing.email, roles)
            return 0
        try:
            session = register(users, body)
        except ShopError as e:
            print(e.message, file=sys.stderr)
            return 1
        if roles != list(DEFAULT_ROLES):
            user = users.get_by_id(session.user.id)
            user.roles = roles
            users.update(user)
        print(f"Created user '{session.user.email}' with roles {roles}.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
