from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    category: str
    stock: int
    min_stock: int
    unit_cost: int
    location: Optional[str] = None
    description: Optional[str] = None
    images: List[str] = []

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock


class AssetIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = "General"
    stock: int = Field(0, ge=0)
    min_stock: int = Field(5, ge=0)
    unit_cost: int = Field(0, ge=0)
    location: Optional[str] = None
    description: Optional[str] = None
    images: List[str] = []
