from typing import List, Optional

from storefront.config import settings
from storefront.schemas.asset_schema import AssetOut
from storefront.schemas.product_schema import ProductOut

ALL = "All"


def _matches(term: str, *fields: Optional[str]) -> bool:
    term = term.lower()
    return any(f and term in f.lower() for f in fields)


def filter_products(products: List[ProductOut], search: str = "", category: Optional[str] = ALL) -> List[ProductOut]:
    """Case-insensitive search on name or collection; exact category unless ALL."""
    out = []
    for p in products:
        if search and not _matches(search, p.name, p.collection):
            continue
        if category and category != ALL and p.category != category:
            continue
        out.append(p)
    return out


def filter_assets(assets: List[AssetOut], search: str = "", category: Optional[str] = ALL) -> List[AssetOut]:
    out = []
    for a in assets:
        if search and not _matches(search, a.name, a.category):
            continue
        if category and category != ALL and a.category != category:
            continue
        out.append(a)
    return out


def product_is_low_stock(p: ProductOut, threshold: Optional[int] = None) -> bool:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    if p.variants:
        return any((v.stock or 0) <= threshold for v in p.variants if v.stock is not None)
    return p.stock is not None and p.stock <= threshold


def low_stock_products(products: List[ProductOut], threshold: Optional[int] = None) -> List[ProductOut]:
    return [p for p in products if product_is_low_stock(p, threshold)]


def low_stock_assets(assets: List[AssetOut]) -> List[AssetOut]:
    return [a for a in assets if a.is_low_stock]
