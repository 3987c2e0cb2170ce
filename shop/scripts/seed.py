"""
Reset the catalogue to a small seed data set. Run from project root:
  python -m shop.scripts.seed

Deletes every product, makes sure the seed users exist and inserts the seed
products owned by the seed admin. Image entries are bare filenames served by
GET /files/product/<name>.
"""
import logging
import sys

from shop.core.database import session_scope
from shop.core.security import hash_password
from shop.models.user import ROLE_ADMIN, ROLE_USER, User
from shop.repositories.products import ProductRepository
from shop.repositories.users import UserRepository
from shop.schemas.products import CreateProductRequest
from shop.services.products import create_product, delete_all_products

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

SEED_USERS = [
    {"email": "test1@google.com", "full_name": "Test One", "password": "Abc123", "roles": [ROLE_ADMIN]},
    {"email": "test2@google.com", "full_name": "Test Two", "password": "Abc123", "roles": [ROLE_USER]},
]

SEED_PRODUCTS = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "description": "Relaxed fit crew neck sweatshirt in heavyweight cotton fleece.",
        "price": 75,
        "stock": 7,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tags": ["sweatshirt"],
        "images": ["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
    },
    {
        "title": "Men's Quilted Shirt Jacket",
        "description": "Mid-weight quilted shirt jacket with a snap front.",
        "price": 200,
        "stock": 5,
        "sizes": ["XS", "S", "M", "XL", "XXL"],
        "gender": "men",
        "tags": ["jacket"],
        "images": ["1740507-00-A_0_2000.jpg", "1740507-00-A_1.jpg"],
    },
    {
        "title": "Women's Cropped Puffer Jacket",
        "description": "Cropped puffer with a relaxed silhouette and high collar.",
        "price": 225,
        "stock": 85,
        "sizes": ["XS", "S", "M"],
        "gender": "women",
        "tags": ["hoodie"],
        "images": ["1740535-00-A_0_2000.jpg", "1740535-00-A_1.jpg"],
    },
    {
        "title": "Kids Cybertruck Long Sleeve Tee",
        "description": "Long sleeve tee in soft cotton with a printed graphic.",
        "price": 30,
        "stock": 10,
        "sizes": ["XS", "S", "M"],
        "gender": "kid",
        "tags": ["shirt"],
        "images": ["1742694-00-A_1_2000.jpg", "1742694-00-A_3.jpg"],
    },
]


def _ensure_users(users: UserRepository) -> User:
    """Create missing seed users; return the first (admin) one."""
    seeded: list[User] = []
    for entry in SEED_USERS:
        user = users.get_by_email(entry["email"])
        if user is None:
            user = users.insert(
                User(
                    email=entry["email"],
                    full_name=entry["full_name"],
                    password=hash_password(entry["password"]),
                    roles=entry["roles"],
                )
            )
            logger.info("Seed user created: %s", user.email)
        seeded.append(user)
    return seeded[0]


def main() -> int:
    """Run the seed; returns a process exit code."""
    try:
        with session_scope() as db:
            owner = _ensure_users(UserRepository(db))
            products = ProductRepository(db)
            delete_all_products(products)
            for item in SEED_PRODUCTS:
                create_product(products, CreateProductRequest(**item), owner)
        logger.info("Seed completed: products=%s", len(SEED_PRODUCTS))
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
