from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_gateway
from storefront.db import get_db
from storefront.repositories.gateway import PersistenceGateway
from storefront.schemas.asset_schema import AssetIn
from storefront.schemas.product_schema import ProductIn
from storefront.services.catalog_service import ALL, filter_assets, low_stock_assets, low_stock_products
from storefront.services.inventory_service import InventoryException, InventoryService

router = APIRouter(prefix="/api/admin", tags=["inventory"])


@router.post("/products", summary="Create product")
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    svc = InventoryService(db)
    try:
        return svc.create_product(payload).model_dump(mode="json")
    except InventoryException as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/products/{product_id}", summary="Replace product fields and variants")
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    svc = InventoryService(db)
    try:
        return svc.update_product(product_id, payload).model_dump(mode="json")
    except InventoryException as e:
        status = 404 if "not found" in str(e) else 400
        raise HTTPException(status_code=status, detail=str(e))


@router.delete("/products/{product_id}", summary="Delete product")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    svc = InventoryService(db)
    try:
        svc.delete_product(product_id)
    except InventoryException as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


@router.get("/assets", summary="List internal assets")
def list_assets(
    q: Optional[str] = Query(None, description="search term (name or category)"),
    category: str = Query(ALL),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    items = filter_assets(gateway.list_assets(), search=q or "", category=category)
    return {
        "items": [{**a.model_dump(), "low_stock": a.is_low_stock} for a in items],
        "total": len(items),
    }


@router.post("/assets", summary="Create internal asset")
def create_asset(payload: AssetIn, db: Session = Depends(get_db)):
    return InventoryService(db).create_asset(payload).model_dump()


@router.put("/assets/{asset_id}", summary="Update internal asset")
def update_asset(asset_id: int, payload: AssetIn, db: Session = Depends(get_db)):
    try:
        return InventoryService(db).update_asset(asset_id, payload).model_dump()
    except InventoryException as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/assets/{asset_id}", summary="Delete internal asset")
def delete_asset(asset_id: int, db: Session = Depends(get_db)):
    try:
        InventoryService(db).delete_asset(asset_id)
    except InventoryException as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


@router.get("/low-stock", summary="Products and assets that need restocking")
def low_stock(
    threshold: Optional[int] = Query(None, ge=0),
    gateway: PersistenceGateway = Depends(get_gateway),
):
    products = low_stock_products(gateway.list_products(), threshold)
    assets = low_stock_assets(gateway.list_assets())
    return {
        "products": [{"id": p.id, "name": p.name, "stock": p.stock} for p in products],
        "assets": [
            {"id": a.id, "name": a.name, "stock": a.stock, "min_stock": a.min_stock}
            for a in assets
        ],
    }
