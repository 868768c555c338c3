import os
import tempfile

# must be set before storefront.config is imported
os.environ.setdefault(
    "DATABASE_URL", "sqlite:///" + os.path.join(tempfile.gettempdir(), "storefront_test.db")
)

import pytest

from storefront.db import SessionLocal, init_db
from storefront.main import app
from storefront.schemas.asset_schema import AssetIn
from storefront.schemas.product_schema import ProductIn, VariantIn
from storefront.services.cart_service import Cart
from storefront.services.inventory_service import InventoryService
from storefront.services.order_service import OrderComposer
from storefront.services.session_store import MemoryStore


@pytest.fixture(autouse=True)
def fresh_state():
    init_db(reset=True)
    app.state.carts = MemoryStore(Cart)
    app.state.drafts = MemoryStore(OrderComposer)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def catalog(db):
    """Two products (one with variants, one untracked) and two assets."""
    svc = InventoryService(db)
    ring = svc.create_product(
        ProductIn(
            name="Anillo Luna",
            price=10000,
            unit_cost=4000,
            stock=2,
            category="Anillos",
            collection="Celeste",
            variants=[
                VariantIn(name="Plata 950", price=12000, stock=3, is_primary=True),
                VariantIn(name="Oro 18k", price=90000, stock=1),
            ],
        )
    )
    earrings = svc.create_product(
        ProductIn(name="Aros Gota", price=15000, unit_cost=5000, stock=5, category="Aros", collection="Agua")
    )
    necklace = svc.create_product(
        ProductIn(name="Collar Raíz", price=60000, stock=None, category="Collares")
    )
    box = svc.create_asset(AssetIn(name="Caja kraft", category="Empaque", stock=4, min_stock=5, unit_cost=300))
    bag = svc.create_asset(AssetIn(name="Bolsa tela", category="Empaque", stock=10, min_stock=2, unit_cost=500))
    return {"ring": ring, "earrings": earrings, "necklace": necklace, "box": box, "bag": bag}
