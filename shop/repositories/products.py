"""Product persistence, including the scoped transaction used by updates."""

import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from shop.models.product import Product, ProductImage

# Columns a partial update may touch; images and ownership are handled separately.
SCALAR_FIELDS = frozenset(
    {"title", "price", "description", "slug", "stock", "sizes", "gender", "tags"}
)


class ProductRepository:
    """Product + ProductImage persistence on a request-scoped session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Scoped transaction over the repository's session.

        Commits when the block exits normally, rolls back on any exception,
        and always releases the session's connection (close) on the way out.
        Objects loaded before the block are detached afterwards; re-fetch them.
        """
        try:
            yield self.session
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        finally:
            self.session.close()

    def insert(self, product: Product) -> Product:
        """Insert a product together with its images (ORM cascade) in one commit."""
        self.session.add(product)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(product)
        return product

    def preload(self, product_id: uuid.UUID, changes: dict[str, Any]) -> Product | None:
        """Load the product by id and apply scalar changes in memory (not flushed)."""
        product = self.session.get(Product, product_id)
        if product is None:
            return None
        for field, value in changes.items():
            if field in SCALAR_FIELDS:
                setattr(product, field, value)
        return product

    def delete_images(self, product: Product) -> None:
        """Delete every image row of the product inside the current transaction."""
        self.session.execute(
            delete(ProductImage)
            .where(ProductImage.product_id == product.id)
            .execution_options(synchronize_session=False)
        )
        # The loaded collection is stale now; reload it (empty) on next access.
        self.session.expire(product, ["images"])

    def save(self, product: Product) -> Product:
        """Flush pending changes of a product; committing is up to the caller."""
        self.session.add(product)
        self.session.flush()
        return product

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        return self.session.get(Product, product_id)

    def get_by_title_or_slug(self, term: str) -> Product | None:
        stmt = select(Product).where(
            or_(
                func.upper(Product.title) == term.upper(),
                Product.slug == term.lower(),
            )
        )
        return self.session.scalars(stmt).first()

    def find(
        self,
        *,
        limit: int,
        offset: int,
        gender: str | None = None,
    ) -> Sequence[Product]:
        stmt = select(Product)
        if gender is not None:
            stmt = stmt.where(Product.gender == gender)
        stmt = stmt.order_by(Product.title, Product.id).limit(limit).offset(offset)
        return self.session.scalars(stmt).unique().all()

    def delete(self, product: Product) -> None:
        self.session.delete(product)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def delete_all(self) -> int:
        """Bulk delete every product (images first, so no FK cascade is required)."""
        try:
            self.session.execute(delete(ProductImage))
            result = self.session.execute(delete(Product))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return result.rowcount
