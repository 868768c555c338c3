from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel

from storefront.api.deps import get_cart_store, get_gateway
from storefront.repositories.gateway import NotFound, PersistenceGateway
from storefront.services.brand_service import BrandService
from storefront.services.cart_service import CapacityExceeded, Cart
from storefront.services.pricing import SUPPORTED_CURRENCIES, format_price
from storefront.services.quote_service import QuoteUnavailable, build_quote_link
from storefront.services.session_store import MemoryStore

router = APIRouter(prefix="/api/cart", tags=["cart"])

COOKIE = "cart_uuid"


class AddItemIn(BaseModel):
    product_id: int
    variant_name: Optional[str] = None


class UpdateItemIn(BaseModel):
    product_id: int
    quantity: int
    variant_name: Optional[str] = None


class RemoveItemIn(BaseModel):
    product_id: int
    variant_name: Optional[str] = None


def _cart(request: Request, response: Response, store: MemoryStore) -> Cart:
    cart_uuid, cart = store.get_or_create(request.cookies.get(COOKIE))
    response.set_cookie(COOKIE, cart_uuid, httponly=False, samesite="Lax")
    return cart


def _body(cart: Cart, currency: str = "CLP", rate: Optional[int] = None) -> dict:
    body = cart.to_dict()
    body["display_total"] = format_price(cart.total_price, currency, rate)
    return body


@router.get("", summary="Get cart")
def get_cart(request: Request, response: Response, store: MemoryStore = Depends(get_cart_store)):
    return _body(_cart(request, response, store))


@router.post("/items", summary="Add one unit of a product (or variant)")
def add_item(
    payload: AddItemIn,
    request: Request,
    response: Response,
    store: MemoryStore = Depends(get_cart_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    try:
        product = gateway.get_product(payload.product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    variant = product.get_variant(payload.variant_name)
    if payload.variant_name and variant is None:
        raise HTTPException(status_code=404, detail="Variant not found")
    cart = _cart(request, response, store)
    with store.lock():
        try:
            cart.add_item(product, variant)
        except CapacityExceeded as e:
            raise HTTPException(status_code=409, detail=str(e))
    return _body(cart)


@router.patch("/items", summary="Set quantity; zero or less removes the line")
def update_item(
    payload: UpdateItemIn,
    request: Request,
    response: Response,
    store: MemoryStore = Depends(get_cart_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    cart = _cart(request, response, store)
    if payload.quantity <= 0:
        with store.lock():
            cart.remove_item(payload.product_id, payload.variant_name)
        return _body(cart)

    if cart.find(payload.product_id, payload.variant_name) is None:
        raise HTTPException(status_code=404, detail="Item not in cart")
    # the line holds the product as it was when first added; stock may have moved since
    try:
        product = gateway.get_product(payload.product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    variant = product.get_variant(payload.variant_name)
    if payload.variant_name and variant is None:
        raise HTTPException(status_code=404, detail="Variant not found")
    ceiling = variant.stock if variant else product.stock

    with store.lock():
        line = cart.find(payload.product_id, payload.variant_name)
        if line is None:
            raise HTTPException(status_code=404, detail="Item not in cart")
        if ceiling is not None and payload.quantity > ceiling:
            raise HTTPException(status_code=409, detail=f"No hay más stock disponible (máx. {ceiling})")
        cart.update_quantity(payload.product_id, payload.quantity, payload.variant_name)
    return _body(cart)


@router.delete("/items", summary="Remove a line")
def remove_item(
    payload: RemoveItemIn,
    request: Request,
    response: Response,
    store: MemoryStore = Depends(get_cart_store),
):
    cart = _cart(request, response, store)
    with store.lock():
        cart.remove_item(payload.product_id, payload.variant_name)
    return _body(cart)


@router.delete("", summary="Empty the cart")
def clear_cart(request: Request, response: Response, store: MemoryStore = Depends(get_cart_store)):
    cart = _cart(request, response, store)
    with store.lock():
        cart.clear()
    return _body(cart)


@router.get("/quote", summary="WhatsApp quote link for the current cart")
def quote(
    request: Request,
    response: Response,
    currency: str = Query("CLP"),
    store: MemoryStore = Depends(get_cart_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    currency = currency.upper()
    if currency not in SUPPORTED_CURRENCIES:
        raise HTTPException(status_code=400, detail=f"Unsupported currency: {currency}")
    cart = _cart(request, response, store)
    brand_svc = BrandService(gateway.db)
    brand = brand_svc.get()
    try:
        return build_quote_link(cart, brand, currency, brand.usd_exchange_rate)
    except QuoteUnavailable as e:
        raise HTTPException(status_code=409, detail=str(e))
