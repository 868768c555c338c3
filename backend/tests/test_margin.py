import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.schemas.pricing_schema import CostItem, PricingMode
from storefront.schemas.product_schema import ProductOut
from storefront.services.margin_service import calculate, calculate_for_product, product_roi

client = TestClient(app)

COSTS = [
    CostItem(label="Plata", value=10000),
    CostItem(label="Piedras", value=2000),
    CostItem(label="Mano de Obra", value=3000),
]


def test_markup_mode_suggests_price():
    r = calculate(COSTS, PricingMode.MARKUP, markup=2.5)
    assert r.total_cost == 15000
    assert r.suggested_price == 37500
    assert r.gross_profit == 22500
    assert r.margin_percent == 60.0
    assert r.roi_percent == 150.0
    assert r.implied_markup is None


def test_markup_rounds_half_up():
    assert calculate([CostItem(value=5)], PricingMode.MARKUP, markup=2.5).suggested_price == 13


def test_markup_defaults_to_configured_multiplier():
    assert calculate([CostItem(value=1000)], PricingMode.MARKUP).suggested_price == 2500


def test_target_mode_reports_implied_markup():
    r = calculate(COSTS, PricingMode.TARGET, target_price=45000)
    assert r.suggested_price == 45000
    assert r.gross_profit == 30000
    assert r.margin_percent == 66.7
    assert r.roi_percent == 200.0
    assert r.implied_markup == 3.0


def test_target_mode_without_costs_or_price_is_all_zero():
    r = calculate([], PricingMode.TARGET)
    assert (r.total_cost, r.suggested_price, r.margin_percent, r.roi_percent, r.implied_markup) == (0, 0, 0.0, 0.0, 0.0)


def test_selling_below_cost_gives_negative_margin():
    r = calculate([CostItem(value=10000)], PricingMode.TARGET, target_price=8000)
    assert r.gross_profit == -2000
    assert r.margin_percent == -25.0
    assert r.roi_percent == -20.0


def test_non_positive_markup_rejected():
    with pytest.raises(ValueError):
        calculate(COSTS, PricingMode.MARKUP, markup=0)


def test_product_roi_skips_unknown_cost_and_sorts_by_roi():
    products = [
        ProductOut(id=1, name="Anillo", price=10000, unit_cost=4000),
        ProductOut(id=2, name="Aros", price=15000, unit_cost=5000),
        ProductOut(id=3, name="Collar", price=60000, unit_cost=None),
        ProductOut(id=4, name="Dije", price=9000, unit_cost=0),
    ]
    rows = product_roi(products)
    assert [r.id for r in rows] == [2, 1]
    assert (rows[0].profit, rows[0].roi_percent, rows[0].margin_percent) == (10000, 200.0, 66.7)


def test_calculate_for_product_uses_unit_cost_and_price():
    r = calculate_for_product(ProductOut(id=1, name="Anillo", price=10000, unit_cost=4000))
    assert r.mode == PricingMode.TARGET
    assert r.total_cost == 4000
    assert r.implied_markup == 2.5


# --- HTTP ---


def test_pricing_calculate_endpoint():
    res = client.post(
        "/api/admin/pricing/calculate",
        json={"mode": "markup", "costs": [{"label": "Base", "value": 4000}], "markup": 3},
    )
    assert res.status_code == 200
    assert res.json()["suggested_price"] == 12000
    assert client.post("/api/admin/pricing/calculate", json={"mode": "markup", "markup": 0}).status_code == 422


def test_pricing_roi_endpoint(catalog):
    rows = client.get("/api/admin/pricing/roi").json()
    # necklace has no unit cost
    assert [r["name"] for r in rows] == ["Aros Gota", "Anillo Luna"]


def test_pricing_for_product_endpoint(catalog):
    res = client.get(f"/api/admin/pricing/products/{catalog['ring'].id}")
    assert res.json()["roi_percent"] == 150.0
    assert client.get("/api/admin/pricing/products/999").status_code == 404
