from fastapi import APIRouter, Depends
from sqlalchemy import text

from storefront.api.deps import get_cart_store, get_draft_store
from storefront.db import engine
from storefront.services.session_store import MemoryStore
from storefront.utils.log import get_logger

router = APIRouter()
log = get_logger("health")


@router.get("/health", tags=["health"])
def health(
    carts: MemoryStore = Depends(get_cart_store),
    drafts: MemoryStore = Depends(get_draft_store),
):
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception as e:
        log.error(f"database check failed: {e}")

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
        "open_carts": len(carts),
        "open_drafts": len(drafts),
    }
