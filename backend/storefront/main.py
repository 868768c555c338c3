import os
from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_attributes import router as attributes_router
from storefront.api.routes_cart import router as cart_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_inventory import router as inventory_router
from storefront.api.routes_order import router as order_router
from storefront.config import settings
from storefront.db import init_db
from storefront.services.cart_service import Cart
from storefront.services.order_service import OrderComposer
from storefront.services.session_store import MemoryStore
from storefront.utils.log import get_logger

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 drops and recreates every table
    init_db(reset=os.environ.get("RESET_DB", "0").lower() in ("1", "true", "yes"))

    # scheduler for dropping abandoned carts and sale drafts
    scheduler = BackgroundScheduler()

    def expire_job():
        carts = app.state.carts.expire_idle(settings.CART_TTL_SECONDS)
        drafts = app.state.drafts.expire_idle(settings.CART_TTL_SECONDS)
        if carts or drafts:
            log.info(f"expired {len(carts)} cart(s) and {len(drafts)} draft(s)")

    scheduler.add_job(
        expire_job, "interval", seconds=settings.EXPIRE_INTERVAL_SECONDS, id="expire_sessions"
    )
    scheduler.start()

    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Joyería Storefront - Backend", version="0.1.0", lifespan=lifespan)

# transient state, injected into routes through storefront.api.deps
app.state.carts = MemoryStore(Cart)
app.state.drafts = MemoryStore(OrderComposer)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(order_router, tags=["orders"])

app.include_router(inventory_router, tags=["inventory"])

app.include_router(admin_router, tags=["admin"])

app.include_router(attributes_router, tags=["attributes"])
