from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_gateway
from storefront.repositories.gateway import NotFound, PersistenceGateway, TransientIOError
from storefront.services.brand_service import BrandService
from storefront.services.catalog_service import ALL, filter_products
from storefront.services.pricing import SUPPORTED_CURRENCIES, format_price
from storefront.utils.log import get_logger

router = APIRouter(tags=["catalogue"])
log = get_logger("catalogue")


@router.get("", summary="List products")
def list_products(
    q: Optional[str] = Query(None, description="search term (name or collection)"),
    category: str = Query(ALL),
    currency: str = Query("CLP"),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    currency = currency.upper()
    if currency not in SUPPORTED_CURRENCIES:
        raise HTTPException(status_code=400, detail=f"Unsupported currency: {currency}")
    try:
        products = gateway.list_products()
    except TransientIOError as e:
        raise HTTPException(status_code=503, detail=str(e))
    rate = BrandService(gateway.db).exchange_rate()
    items = filter_products(products, search=q or "", category=category)
    return {
        "items": [
            {**p.model_dump(mode="json"), "display_price": format_price(p.price, currency, rate)}
            for p in items
        ],
        "total": len(items),
    }


@router.get("/{product_id}", summary="Get product")
def get_product(product_id: int, gateway: PersistenceGateway = Depends(get_gateway)):
    try:
        return gateway.get_product(product_id).model_dump(mode="json")
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")


@router.post("/{product_id}/click", summary="Record WhatsApp interest")
def register_click(product_id: int, gateway: PersistenceGateway = Depends(get_gateway)):
    try:
        gateway.increment_click(product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    except TransientIOError as e:
        # engagement counter only; the visitor flow continues
        log.warning(f"click not recorded for product {product_id}: {e}")
        return {"ok": False}
    return {"ok": True}
