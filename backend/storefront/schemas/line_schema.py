from typing import Optional, Tuple

from pydantic import BaseModel

from storefront.schemas.asset_schema import AssetOut
from storefront.schemas.product_schema import ProductOut, VariantOut


class CartLine(BaseModel):
    """One product (optionally one of its variants) and a quantity.

    Also used for admin order lines; both share the merge key below.
    """

    product: ProductOut
    variant: Optional[VariantOut] = None
    quantity: int = 1

    @property
    def key(self) -> Tuple[int, Optional[str]]:
        return (self.product.id, self.variant.name if self.variant else None)

    @property
    def unit_price(self) -> int:
        return self.variant.price if self.variant else self.product.price

    @property
    def stock_ceiling(self) -> Optional[int]:
        return self.variant.stock if self.variant else self.product.stock

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


OrderLine = CartLine


class AssetOrderLine(BaseModel):
    asset: AssetOut
    quantity: int = 1
