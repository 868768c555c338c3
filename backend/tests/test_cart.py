import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.models.product import Product
from storefront.schemas.product_schema import ProductOut, VariantOut
from storefront.services.cart_service import CapacityExceeded, Cart

client = TestClient(app)


def _product(id=1, price=10000, stock=2, variants=None):
    return ProductOut(id=id, name=f"Producto {id}", price=price, stock=stock, variants=variants or [])


def test_add_same_item_merges_into_one_line():
    cart = Cart()
    p = _product(stock=None)
    for _ in range(4):
        cart.add_item(p)
    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 4


def test_stock_ceiling_scenario():
    cart = Cart()
    a = _product(stock=2)
    cart.add_item(a)
    cart.add_item(a)
    assert cart.total_items == 2
    with pytest.raises(CapacityExceeded):
        cart.add_item(a)
    assert cart.total_items == 2

    # the engine keeps non-positive quantities; callers remove the line
    cart.update_quantity(a.id, 0)
    assert cart.total_items == 0
    assert len(cart.lines) == 1


def test_variant_ceiling_is_independent_from_product():
    gold = VariantOut(name="Oro 18k", price=90000, stock=1)
    silver = VariantOut(name="Plata 950", price=12000, stock=3)
    p = _product(stock=100, variants=[gold, silver])
    cart = Cart()
    cart.add_item(p, gold)
    with pytest.raises(CapacityExceeded):
        cart.add_item(p, gold)
    cart.add_item(p, silver)
    cart.add_item(p, silver)
    cart.add_item(p)
    assert len(cart.lines) == 3
    assert cart.find(p.id, "Oro 18k").quantity == 1
    assert cart.find(p.id, "Plata 950").quantity == 2


def test_first_add_is_rejected_when_out_of_stock():
    cart = Cart()
    with pytest.raises(CapacityExceeded):
        cart.add_item(_product(stock=0))
    assert cart.lines == []


def test_total_price_uses_variant_price():
    silver = VariantOut(name="Plata 950", price=12000, stock=5)
    p = _product(price=10000, stock=5, variants=[silver])
    cart = Cart()
    cart.add_item(p)
    cart.add_item(p, silver)
    cart.add_item(p, silver)
    assert cart.total_price == 10000 + 2 * 12000


def test_remove_item_and_noop_when_absent():
    cart = Cart()
    p = _product()
    cart.add_item(p)
    assert cart.remove_item(p.id) is True
    assert cart.remove_item(p.id) is False
    assert cart.lines == []


def test_clear_is_idempotent():
    cart = Cart()
    cart.add_item(_product(id=1))
    cart.add_item(_product(id=2))
    cart.clear()
    cart.clear()
    assert cart.total_items == 0
    assert cart.total_price == 0


# --- HTTP ---


def test_add_item_to_cart(catalog):
    ring = catalog["ring"]
    res = client.post("/api/cart/items", json={"product_id": ring.id})
    assert res.status_code == 200
    body = res.json()
    assert body["total_items"] == 1
    assert body["total_price"] == 10000
    assert body["display_total"] == "$10.000"
    assert "cart_uuid" in res.cookies


def test_cart_capacity_returns_409(catalog):
    c = TestClient(app)
    ring = catalog["ring"]
    c.post("/api/cart/items", json={"product_id": ring.id, "variant_name": "Oro 18k"})
    res = c.post("/api/cart/items", json={"product_id": ring.id, "variant_name": "Oro 18k"})
    assert res.status_code == 409
    assert c.get("/api/cart").json()["total_items"] == 1


def test_unknown_variant_is_404(catalog):
    res = TestClient(app).post(
        "/api/cart/items", json={"product_id": catalog["ring"].id, "variant_name": "Titanio"}
    )
    assert res.status_code == 404


def test_patch_to_zero_removes_line(catalog):
    c = TestClient(app)
    earrings = catalog["earrings"]
    c.post("/api/cart/items", json={"product_id": earrings.id})
    res = c.patch("/api/cart/items", json={"product_id": earrings.id, "quantity": 3})
    assert res.json()["total_items"] == 3
    res = c.patch("/api/cart/items", json={"product_id": earrings.id, "quantity": 0})
    assert res.json()["items"] == []


def test_patch_above_stock_is_rejected(catalog):
    c = TestClient(app)
    earrings = catalog["earrings"]
    c.post("/api/cart/items", json={"product_id": earrings.id})
    res = c.patch("/api/cart/items", json={"product_id": earrings.id, "quantity": 6})
    assert res.status_code == 409


def test_patch_checks_current_stock_not_the_added_snapshot(catalog, db):
    c = TestClient(app)
    earrings = catalog["earrings"]
    c.post("/api/cart/items", json={"product_id": earrings.id})

    # stock sold elsewhere after the line was added
    db.query(Product).filter_by(id=earrings.id).update({"stock": 2})
    db.commit()

    res = c.patch("/api/cart/items", json={"product_id": earrings.id, "quantity": 3})
    assert res.status_code == 409
    assert c.get("/api/cart").json()["total_items"] == 1
    res = c.patch("/api/cart/items", json={"product_id": earrings.id, "quantity": 2})
    assert res.json()["total_items"] == 2


def test_remove_and_clear(catalog):
    c = TestClient(app)
    c.post("/api/cart/items", json={"product_id": catalog["earrings"].id})
    c.post("/api/cart/items", json={"product_id": catalog["necklace"].id})
    res = c.request("DELETE", "/api/cart/items", json={"product_id": catalog["earrings"].id})
    assert [i["name"] for i in res.json()["items"]] == ["Collar Raíz"]
    res = c.delete("/api/cart")
    assert res.json()["total_items"] == 0


def test_quote_requires_whatsapp_number(catalog):
    c = TestClient(app)
    c.post("/api/cart/items", json={"product_id": catalog["earrings"].id})
    res = c.get("/api/cart/quote")
    assert res.status_code == 409


def test_quote_link(catalog):
    c = TestClient(app)
    c.patch("/api/admin/settings", json={"brand_name": "Varmina", "whatsapp_number": "+56 9 1234 5678"})
    c.post("/api/cart/items", json={"product_id": catalog["earrings"].id})
    res = c.get("/api/cart/quote", params={"currency": "USD"})
    assert res.status_code == 200
    body = res.json()
    assert body["phone"] == "56912345678"
    assert body["url"].startswith("https://wa.me/56912345678?text=")
    assert "Hola *Varmina*" in body["message"]
    assert "Total Estimado: USD $16" in body["message"]
