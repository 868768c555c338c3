import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from storefront.db import Base


class ProductStatus(str, enum.Enum):
    IN_STOCK = "Disponible"
    MADE_TO_ORDER = "Por Encargo"
    SOLD_OUT = "Agotado"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False, default=0)  # CLP, no decimals
    unit_cost = Column(Integer, nullable=True)
    stock = Column(Integer, nullable=True)  # NULL = not tracked
    status = Column(Enum(ProductStatus), nullable=False, default=ProductStatus.IN_STOCK)
    category = Column(String(64), nullable=True, index=True)
    collection = Column(String(64), nullable=True)
    badge = Column(String(32), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    whatsapp_clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    variants = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariant.id",
    )

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"


class ProductVariant(Base):
    __tablename__ = "product_variants"
    __table_args__ = (UniqueConstraint("product_id", "name", name="uq_variant_name"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(64), nullable=False)  # e.g. "Oro 18k", "Plata 950"
    price = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    images = Column(JSON, nullable=False, default=list)

    product = relationship("Product", back_populates="variants")
