from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.product_attribute import AttributeType, ProductAttribute


class AttributeRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, attribute_id: int) -> Optional[ProductAttribute]:
        return self.db.query(ProductAttribute).filter(ProductAttribute.id == attribute_id).first()

    def list(self, type: Optional[AttributeType] = None) -> List[ProductAttribute]:
        query = self.db.query(ProductAttribute)
        if type is not None:
            query = query.filter(ProductAttribute.type == type)
        return query.order_by(ProductAttribute.name).all()

    def create(self, type: AttributeType, name: str, slug: str) -> ProductAttribute:
        a = ProductAttribute(type=type, name=name, slug=slug)
        self.db.add(a)
        self.db.flush()
        return a

    def delete(self, attribute: ProductAttribute):
        self.db.delete(attribute)
        self.db.flush()
