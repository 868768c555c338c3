from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from storefront.api.deps import get_draft_store, get_gateway
from storefront.repositories.gateway import NotFound, PersistenceGateway
from storefront.services.cart_service import CapacityExceeded
from storefront.services.order_service import OrderComposer, OrderSubmissionError, SubmissionInProgress
from storefront.services.session_store import MemoryStore
from storefront.utils.log import get_logger

router = APIRouter(prefix="/api/admin/orders", tags=["orders"])
log = get_logger("orders")

class ProductLineIn(BaseModel):
    product_id: int
    variant_name: Optional[str] = None

class AssetLineIn(BaseModel):
    asset_id: int

class DraftDetailsIn(BaseModel):
    customer_name: Optional[str] = None
    payment_method: Optional[str] = None

def _draft(draft_id: str, store: MemoryStore) -> OrderComposer:
    draft = store.get(draft_id)
    if draft is None:
        raise HTTPException(status_code=404, detail="Order draft not found")
    return draft

def _body(draft_id: str, draft: OrderComposer) -> dict:
    return {"draft_id": draft_id, **draft.to_dict()}

@router.post("", summary="Start a new sale")
def create_draft(store: MemoryStore = Depends(get_draft_store)):
    draft_id, draft = store.create()
    return _body(draft_id, draft)

@router.get("/{draft_id}", summary="Get a sale in progress")
def get_draft(draft_id: str, store: MemoryStore = Depends(get_draft_store)):
    return _body(draft_id, _draft(draft_id, store))

@router.delete("/{draft_id}", summary="Cancel a sale in progress")
def cancel_draft(draft_id: str, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    if draft.submitting:
        raise HTTPException(status_code=409, detail="La venta se está procesando")
    store.discard(draft_id)
    return {"ok": True}

@router.patch("/{draft_id}", summary="Set customer name / payment method")
def update_details(draft_id: str, payload: DraftDetailsIn, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    try:
        draft.set_details(payload.customer_name, payload.payment_method)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.post("/{draft_id}/products", summary="Add one unit of a product")
def add_product_line(
    draft_id: str,
    payload: ProductLineIn,
    store: MemoryStore = Depends(get_draft_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    draft = _draft(draft_id, store)
    try:
        product = gateway.get_product(payload.product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    variant = product.get_variant(payload.variant_name)
    if payload.variant_name and variant is None:
        raise HTTPException(status_code=404, detail="Variant not found")
    try:
        draft.add_product_line(product, variant)
    except CapacityExceeded as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.post("/{draft_id}/products/decrease", summary="Remove one unit of a product")
def decrease_product_line(draft_id: str, payload: ProductLineIn, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    try:
        draft.decrease_product_line(payload.product_id, payload.variant_name)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.delete("/{draft_id}/products/{index}", summary="Remove a product line by position")
def remove_product_line(draft_id: str, index: int, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    try:
        draft.remove_product_line(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.post("/{draft_id}/assets", summary="Add one unit of an internal asset")
def add_asset_line(
    draft_id: str,
    payload: AssetLineIn,
    store: MemoryStore = Depends(get_draft_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    draft = _draft(draft_id, store)
    try:
        asset = gateway.get_asset(payload.asset_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Asset not found")
    try:
        draft.add_asset_line(asset)
    except (CapacityExceeded, SubmissionInProgress) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.post("/{draft_id}/assets/decrease", summary="Remove one unit of an asset")
def decrease_asset_line(draft_id: str, payload: AssetLineIn, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    try:
        draft.decrease_asset_line(payload.asset_id)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.delete("/{draft_id}/assets/{index}", summary="Remove an asset line by position")
def remove_asset_line(draft_id: str, index: int, store: MemoryStore = Depends(get_draft_store)):
    draft = _draft(draft_id, store)
    try:
        draft.remove_asset_line(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _body(draft_id, draft)

@router.post("/{draft_id}/submit", summary="Deduct stock and record the sale")
def submit(
    draft_id: str,
    store: MemoryStore = Depends(get_draft_store),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    draft = _draft(draft_id, store)
    try:
        result = draft.submit(gateway)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    except OrderSubmissionError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "message": str(e),
                "reason": str(e.cause) if e.cause else None,
                "uncompensated": e.compensation_failures,
            },
        )
    except Exception as e:
        log.error(f"CRITICAL ERROR during submit: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {type(e).__name__}")
    if result is None:
        # nothing to sell; the draft is returned unchanged
        return {"submitted": False, **_body(draft_id, draft)}
    return {"submitted": True, "draft_id": draft_id, **result.model_dump(mode="json")}
