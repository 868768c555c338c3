from fastapi.testclient import TestClient

from storefront.main import app
from storefront.schemas.product_schema import ProductOut
from storefront.services.analytics_service import summarize

client = TestClient(app)


def test_summarize_aggregates():
    products = [
        ProductOut(id=1, name="A", price=1000, unit_cost=400, stock=3, category="Anillos", whatsapp_clicks=5),
        ProductOut(id=2, name="B", price=2000, unit_cost=None, stock=None, category="Aros", whatsapp_clicks=1),
        ProductOut(id=3, name="C", price=500, unit_cost=100, stock=10, category="Anillos", whatsapp_clicks=0),
    ]
    s = summarize(products)
    assert s["total_clicks"] == 6
    assert s["engagement_rate"] == 2.0
    assert [p["id"] for p in s["top_products"]] == [1, 2, 3]
    assert s["inventory_cost"] == 400 * 3 + 100 * 10
    assert s["potential_sales"] == 1000 * 3 + 500 * 10
    assert s["total_units"] == 13
    assert [c["name"] for c in s["categories"]] == ["Anillos", "Aros"]
    assert s["categories"][0] == {"name": "Anillos", "value": 8000, "clicks": 5, "count": 2}


def test_summarize_empty():
    assert summarize([])["engagement_rate"] == 0.0


def test_analytics_endpoint_and_reset(catalog):
    pid = catalog["earrings"].id
    client.post(f"/api/products/{pid}/click")
    assert client.get("/api/admin/analytics").json()["total_clicks"] == 1
    client.post("/api/admin/analytics/reset")
    assert client.get("/api/admin/analytics").json()["total_clicks"] == 0


def test_transaction_validation():
    res = client.post("/api/admin/transactions", json={"description": "", "amount": 100, "type": "expense"})
    assert res.status_code == 400
    res = client.post("/api/admin/transactions", json={"description": "Cajas", "amount": 0, "type": "expense"})
    assert res.status_code == 400


def test_transactions_and_balance():
    client.post(
        "/api/admin/transactions",
        json={"description": "Venta feria", "amount": 50000, "type": "income", "date": "2026-01-10"},
    )
    created = client.post(
        "/api/admin/transactions",
        json={"description": "Plata", "amount": 20000, "type": "expense", "date": "2026-02-01"},
    ).json()
    assert created["category"] == "Varios"

    assert client.get("/api/admin/transactions/balance").json() == {
        "income": 50000,
        "expense": 20000,
        "balance": 30000,
    }
    assert client.get("/api/admin/transactions/balance", params={"end": "2026-01-31"}).json()["expense"] == 0

    listed = client.get("/api/admin/transactions").json()
    assert [t["description"] for t in listed] == ["Plata", "Venta feria"]

    res = client.patch(f"/api/admin/transactions/{created['id']}", json={"amount": 25000})
    assert res.json()["amount"] == 25000
    assert client.delete(f"/api/admin/transactions/{created['id']}").status_code == 200
    assert client.patch(f"/api/admin/transactions/{created['id']}", json={"amount": 1}).status_code == 404


def test_settings_roundtrip():
    assert client.get("/api/admin/settings").json()["usd_exchange_rate"] is None
    res = client.patch("/api/admin/settings", json={"usd_exchange_rate": 1000, "brand_name": "Varmina"})
    assert res.json()["usd_exchange_rate"] == 1000
    assert client.get("/api/admin/settings").json()["brand_name"] == "Varmina"
    assert client.patch("/api/admin/settings", json={"usd_exchange_rate": 0}).status_code == 422
