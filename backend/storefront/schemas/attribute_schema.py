from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from storefront.models.product_attribute import AttributeType


class AttributeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    type: AttributeType
    name: str
    slug: str
    created_at: Optional[datetime] = None


class AttributeIn(BaseModel):
    type: AttributeType
    name: str
