import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Integer, String, UniqueConstraint

from storefront.db import Base


class AttributeType(str, enum.Enum):
    COLLECTION = "collection"
    CATEGORY = "category"
    ERP_CATEGORY = "erp_category"


class ProductAttribute(Base):
    """Named values offered in the product form and catalog filters."""

    __tablename__ = "product_attributes"
    __table_args__ = (UniqueConstraint("type", "slug", name="uq_attribute_type_slug"),)

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(AttributeType), nullable=False, index=True)
    name = Column(String(64), nullable=False)
    slug = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<ProductAttribute {self.type.value}:{self.slug}>"
