"""ORM models for products and their image rows."""

import uuid

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from shop.models.base import Base, JSONList


class Product(Base):
    """
    Catalogue product owned by the user who last wrote it.

    Images are owned exclusively by the product: they are inserted with it,
    replaced wholesale on update and removed with it.
    """

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False, unique=True)
    price = Column(Float, nullable=False, default=0)
    description = Column(Text, nullable=True)
    slug = Column(Text, nullable=False, unique=True)
    stock = Column(Integer, nullable=False, default=0)
    sizes = Column(JSONList, nullable=False, default=list)
    gender = Column(String(16), nullable=False, index=True)
    tags = Column(JSONList, nullable=False, default=list)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.id",
        lazy="selectin",
    )
    user = relationship("User", back_populates="products", lazy="joined")


class ProductImage(Base):
    """One image URL (or bare filename) attached to a product."""

    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(Text, nullable=False)
    product_id = Column(
        Uuid,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product = relationship("Product", back_populates="images")
