"""Product service: create, query, transactional update and removal."""

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError

from shop.core.exceptions import InternalFailure, NotFound
from shop.models.product import Product, ProductImage
from shop.models.user import User
from shop.repositories.products import ProductRepository
from shop.schemas.products import (
    CreateProductRequest,
    PaginationParams,
    ProductResponse,
    UpdateProductRequest,
)
from shop.services.db_errors import raise_store_error

logger = logging.getLogger(__name__)


def normalize_slug(value: str) -> str:
    """Lowercase, spaces to underscores, apostrophes dropped."""
    return value.lower().replace(" ", "_").replace("'", "")


def _parse_id(term: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(term)
    except ValueError:
        return None


def _build_images(urls: Iterable[str]) -> list[ProductImage]:
    return [ProductImage(url=url) for url in urls]


def create_product(
    products: ProductRepository,
    body: CreateProductRequest,
    user: User,
) -> ProductResponse:
    """Insert the product and its image rows as one aggregate, owned by user."""
    details = body.model_dump(exclude={"images", "slug"}, exclude_none=True)
    try:
        product = Product(
            **details,
            slug=normalize_slug(body.slug or body.title),
            images=_build_images(body.images or []),
            user=user,
        )
        product = products.insert(product)
    except Exception as e:
        raise_store_error(e)
    logger.info("Product created: id=%s user_id=%s", product.id, user.id)
    return ProductResponse.from_product(product)


def find_all(products: ProductRepository, pagination: PaginationParams) -> list[ProductResponse]:
    try:
        rows = products.find(
            limit=pagination.limit,
            offset=pagination.offset,
            gender=pagination.gender,
        )
    except SQLAlchemyError as e:
        logger.exception("Product listing failed")
        raise InternalFailure() from e
    return [ProductResponse.from_product(p) for p in rows]


def find_one(products: ProductRepository, term: str) -> Product:
    """
    Resolve term as an id when it parses as a UUID, otherwise as a slug or a
    case-insensitive title. Raises NotFound when nothing matches.
    """
    product_id = _parse_id(term)
    try:
        if product_id is not None:
            product = products.get_by_id(product_id)
        else:
            product = products.get_by_title_or_slug(term)
    except SQLAlchemyError as e:
        logger.exception("Product lookup failed: term=%s", term)
        raise InternalFailure() from e
    if product is None:
        raise NotFound(f"Product with {term} not found")
    return product


def find_one_plain(products: ProductRepository, term: str) -> ProductResponse:
    return ProductResponse.from_product(find_one(products, term))


def update_product(
    products: ProductRepository,
    product_id: uuid.UUID,
    body: UpdateProductRequest,
    user: User,
) -> ProductResponse:
    """
    Apply a partial update; when images are sent, replace them wholesale.

    The image delete, the new image rows and the scalar changes are saved in
    one transaction: on any failure everything is rolled back and
    InternalFailure is raised, so no partial image replacement is ever visible.
    """
    changes = body.model_dump(exclude_unset=True, exclude={"images"})
    if changes.get("slug"):
        changes["slug"] = normalize_slug(changes["slug"])

    try:
        product = products.preload(product_id, changes)
    except SQLAlchemyError as e:
        logger.exception("Product preload failed: id=%s", product_id)
        raise InternalFailure() from e
    if product is None:
        raise NotFound(f"Product with id: {product_id} not found")

    # The transaction releases the session, detaching everything loaded so far.
    owner_id = user.id
    try:
        with products.transaction():
            if body.images is not None:
                products.delete_images(product)
                product.images = _build_images(body.images)
            product.user = user
            products.save(product)
    except Exception as e:
        logger.exception("Product update rolled back: id=%s", product_id)
        raise InternalFailure() from e

    logger.info("Product updated: id=%s user_id=%s", product_id, owner_id)
    return find_one_plain(products, str(product_id))


def remove_product(products: ProductRepository, term: str) -> None:
    product = find_one(products, term)
    try:
        products.delete(product)
    except Exception as e:
        raise_store_error(e)
    logger.info("Product removed: id=%s", product.id)


def delete_all_products(products: ProductRepository) -> int:
    """Delete every product. Administrative/seed utility."""
    try:
        deleted = products.delete_all()
    except Exception as e:
        logger.exception("Bulk product delete failed")
        raise InternalFailure() from e
    logger.info("All products deleted: count=%s", deleted)
    return deleted
