from fastapi.testclient import TestClient

from storefront.main import app
from storefront.schemas.asset_schema import AssetOut
from storefront.schemas.product_schema import ProductOut
from storefront.services.catalog_service import filter_assets, filter_products

client = TestClient(app)


def test_list_products(catalog):
    res = client.get("/api/products")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 3
    # newest first
    assert [it["name"] for it in body["items"]][0] == "Collar Raíz"
    ring = next(it for it in body["items"] if it["name"] == "Anillo Luna")
    assert ring["display_price"] == "$10.000"
    assert {v["name"] for v in ring["variants"]} == {"Plata 950", "Oro 18k"}


def test_list_products_search_and_category(catalog):
    res = client.get("/api/products", params={"q": "celeste"})
    assert [it["name"] for it in res.json()["items"]] == ["Anillo Luna"]
    res = client.get("/api/products", params={"category": "Aros"})
    assert [it["name"] for it in res.json()["items"]] == ["Aros Gota"]


def test_list_products_in_usd(catalog):
    res = client.get("/api/products", params={"currency": "usd", "category": "Aros"})
    assert res.json()["items"][0]["display_price"] == "USD $16"


def test_get_product_404():
    assert client.get("/api/products/999").status_code == 404


def test_click_counter(catalog):
    pid = catalog["earrings"].id
    assert client.post(f"/api/products/{pid}/click").json() == {"ok": True}
    client.post(f"/api/products/{pid}/click")
    assert client.get(f"/api/products/{pid}").json()["whatsapp_clicks"] == 2
    assert client.post("/api/products/999/click").status_code == 404


def test_filter_helpers():
    products = [
        ProductOut(id=1, name="Anillo Sol", price=1, collection="Verano", category="Anillos"),
        ProductOut(id=2, name="Aros Luna", price=1, collection="Noche", category="Aros"),
    ]
    assert [p.id for p in filter_products(products, "SOL")] == [1]
    assert [p.id for p in filter_products(products, "noche")] == [2]
    assert [p.id for p in filter_products(products, "", "Anillos")] == [1]
    assert len(filter_products(products, "", "All")) == 2

    assets = [
        AssetOut(id=1, name="Caja", category="Empaque", stock=1, min_stock=0, unit_cost=0),
        AssetOut(id=2, name="Paño", category="Limpieza", stock=1, min_stock=0, unit_cost=0),
    ]
    assert [a.id for a in filter_assets(assets, "empa")] == [1]
    assert [a.id for a in filter_assets(assets, "", "Limpieza")] == [2]
