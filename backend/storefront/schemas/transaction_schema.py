import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict

from storefront.models.transaction import TransactionType


class TransactionIn(BaseModel):
    # rules (required description, positive amount) are enforced by FinanceService
    description: str = ""
    amount: int = 0
    type: TransactionType
    category: Optional[str] = None
    date: Optional[dt.date] = None


class TransactionUpdate(BaseModel):
    description: Optional[str] = None
    amount: Optional[int] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    description: str
    amount: int
    type: TransactionType
    category: str
    date: dt.date
    created_at: Optional[dt.datetime] = None
