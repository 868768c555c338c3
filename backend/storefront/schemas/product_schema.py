from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.product import ProductStatus


class VariantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    name: str
    price: int
    stock: Optional[int] = None
    images: List[str] = []
    is_primary: bool = False


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: Optional[str] = None
    price: int
    unit_cost: Optional[int] = None
    stock: Optional[int] = None
    status: ProductStatus = ProductStatus.IN_STOCK
    category: Optional[str] = None
    collection: Optional[str] = None
    badge: Optional[str] = None
    images: List[str] = []
    whatsapp_clicks: int = 0
    variants: List[VariantOut] = []
    created_at: Optional[datetime] = None

    def get_variant(self, name: Optional[str]) -> Optional[VariantOut]:
        if name is None:
            return None
        return next((v for v in self.variants if v.name == name), None)


class VariantIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    price: int = Field(..., ge=0)
    stock: Optional[int] = Field(None, ge=0)
    images: List[str] = []
    is_primary: bool = False


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: int = Field(..., ge=0)
    unit_cost: Optional[int] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    status: ProductStatus = ProductStatus.IN_STOCK
    category: Optional[str] = None
    collection: Optional[str] = None
    badge: Optional[str] = None
    images: List[str] = []
    variants: List[VariantIn] = []
