from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.product_attribute import AttributeType
from storefront.schemas.attribute_schema import AttributeIn
from storefront.services.attribute_service import (
    AttributeConflict,
    AttributeException,
    AttributeNotFound,
    AttributeService,
)

router = APIRouter(prefix="/api/admin/attributes", tags=["attributes"])


@router.get("", summary="List categories / collections, by name")
def list_attributes(type: Optional[AttributeType] = Query(None), db: Session = Depends(get_db)):
    return [a.model_dump(mode="json") for a in AttributeService(db).list(type)]


@router.post("", summary="Create a category or collection")
def create_attribute(payload: AttributeIn, db: Session = Depends(get_db)):
    try:
        return AttributeService(db).create(payload).model_dump(mode="json")
    except AttributeConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AttributeException as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{attribute_id}", summary="Delete a category or collection")
def delete_attribute(attribute_id: int, db: Session = Depends(get_db)):
    try:
        AttributeService(db).delete(attribute_id)
    except AttributeNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}
