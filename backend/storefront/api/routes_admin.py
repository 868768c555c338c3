from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_gateway
from storefront.db import get_db
from storefront.repositories.gateway import NotFound, PersistenceGateway, TransientIOError, ValidationError
from storefront.schemas.pricing_schema import PricingRequest
from storefront.schemas.settings_schema import BrandSettingsUpdate
from storefront.schemas.transaction_schema import TransactionIn, TransactionUpdate
from storefront.services.analytics_service import summarize
from storefront.services.brand_service import BrandService
from storefront.services.finance_service import FinanceService
from storefront.services.inventory_service import InventoryService
from storefront.services.margin_service import calculate, calculate_for_product, product_roi

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/analytics", summary="Engagement and inventory valuation")
def analytics(gateway: PersistenceGateway = Depends(get_gateway)):
    return summarize(gateway.list_products())


@router.post("/analytics/reset", summary="Reset every WhatsApp click counter")
def reset_analytics(db: Session = Depends(get_db)):
    return {"reset": InventoryService(db).reset_clicks()}


@router.post("/pricing/calculate", summary="Suggested price, margin and ROI from cost items")
def pricing_calculate(payload: PricingRequest):
    return calculate(payload.costs, payload.mode, payload.markup, payload.target_price).model_dump(mode="json")


@router.get("/pricing/roi", summary="Products with a unit cost, best ROI first")
def pricing_roi(gateway: PersistenceGateway = Depends(get_gateway)):
    return [r.model_dump() for r in product_roi(gateway.list_products())]


@router.get("/pricing/products/{product_id}", summary="Margin of a catalog product at its current price")
def pricing_for_product(product_id: int, gateway: PersistenceGateway = Depends(get_gateway)):
    try:
        product = gateway.get_product(product_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    return calculate_for_product(product).model_dump(mode="json")


@router.get("/transactions", summary="List ledger entries, newest first")
def list_transactions(limit: int = Query(50, ge=1, le=500), db: Session = Depends(get_db)):
    return [t.model_dump(mode="json") for t in FinanceService(db).list(limit=limit)]


@router.post("/transactions", summary="Record income or expense")
def create_transaction(payload: TransactionIn, db: Session = Depends(get_db)):
    try:
        return FinanceService(db).create(payload).model_dump(mode="json")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TransientIOError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/transactions/balance", summary="Income, expense and balance")
def balance(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    return FinanceService(db).balance(start, end)


@router.patch("/transactions/{transaction_id}", summary="Edit a ledger entry")
def update_transaction(transaction_id: int, payload: TransactionUpdate, db: Session = Depends(get_db)):
    try:
        return FinanceService(db).update(transaction_id, payload).model_dump(mode="json")
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/transactions/{transaction_id}", summary="Delete a ledger entry")
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    try:
        FinanceService(db).delete(transaction_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


@router.get("/settings", summary="Brand settings")
def get_settings(db: Session = Depends(get_db)):
    return BrandService(db).get().model_dump()


@router.patch("/settings", summary="Update brand settings")
def update_settings(payload: BrandSettingsUpdate, db: Session = Depends(get_db)):
    return BrandService(db).update(payload).model_dump()
