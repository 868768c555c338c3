from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.config import settings


class PricingMode(str, Enum):
    MARKUP = "markup"
    TARGET = "target"


class CostItem(BaseModel):
    label: str = "Costo Adicional"
    value: int = Field(0, ge=0)


class PricingRequest(BaseModel):
    mode: PricingMode = PricingMode.TARGET
    costs: List[CostItem] = []
    markup: float = Field(settings.DEFAULT_MARKUP, gt=0)
    target_price: Optional[int] = Field(None, ge=0)


class MarginBreakdown(BaseModel):
    mode: PricingMode
    total_cost: int
    suggested_price: int
    gross_profit: int
    margin_percent: float
    roi_percent: float
    # only reported for a target price; in markup mode the multiplier is the input
    implied_markup: Optional[float] = None


class ProductRoi(BaseModel):
    id: int
    name: str
    price: int
    unit_cost: int
    profit: int
    roi_percent: float
    margin_percent: float
