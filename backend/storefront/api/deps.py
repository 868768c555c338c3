from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.repositories.gateway import PersistenceGateway
from storefront.services.session_store import MemoryStore


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    return PersistenceGateway(db)


def get_cart_store(request: Request) -> MemoryStore:
    return request.app.state.carts


def get_draft_store(request: Request) -> MemoryStore:
    return request.app.state.drafts
