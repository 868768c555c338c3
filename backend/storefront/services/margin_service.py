import math
from typing import Iterable, List, Optional

from storefront.config import settings
from storefront.schemas.pricing_schema import CostItem, MarginBreakdown, PricingMode, ProductRoi
from storefront.schemas.product_schema import ProductOut


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole > 0 else 0.0


def total_cost(costs: Iterable[CostItem]) -> int:
    return sum(c.value for c in costs)


def calculate(
    costs: Iterable[CostItem],
    mode: PricingMode = PricingMode.TARGET,
    markup: Optional[float] = None,
    target_price: Optional[int] = None,
) -> MarginBreakdown:
    """
    Price a piece from its cost items.

    markup: suggested price = round(total cost * markup).
    target: the given price is kept and the markup it implies is reported.
    Margin is profit over price, ROI is profit over cost; both are 0 when
    the divisor is 0.
    """
    cost = total_cost(costs)
    implied = None
    if mode == PricingMode.MARKUP:
        markup = settings.DEFAULT_MARKUP if markup is None else markup
        if markup <= 0:
            raise ValueError("Markup must be positive")
        price = _round_half_up(cost * markup)
    else:
        price = target_price or 0
        implied = round(price / cost, 2) if cost > 0 else 0.0

    profit = price - cost
    return MarginBreakdown(
        mode=mode,
        total_cost=cost,
        suggested_price=price,
        gross_profit=profit,
        margin_percent=_percent(profit, price),
        roi_percent=_percent(profit, cost),
        implied_markup=implied,
    )


def calculate_for_product(product: ProductOut, extra_costs: Iterable[CostItem] = ()) -> MarginBreakdown:
    """Target-price breakdown using the product's unit cost as the base cost."""
    costs = [CostItem(label="Costo Base (Producción/Compra)", value=product.unit_cost or 0)]
    costs.extend(extra_costs)
    return calculate(costs, PricingMode.TARGET, target_price=product.price)


def product_roi(products: Iterable[ProductOut]) -> List[ProductRoi]:
    """Products with a known unit cost, best return first."""
    rows = []
    for p in products:
        if not p.unit_cost or p.unit_cost <= 0:
            continue
        profit = p.price - p.unit_cost
        rows.append(
            ProductRoi(
                id=p.id,
                name=p.name,
                price=p.price,
                unit_cost=p.unit_cost,
                profit=profit,
                roi_percent=_percent(profit, p.unit_cost),
                margin_percent=_percent(profit, p.price),
            )
        )
    return sorted(rows, key=lambda r: r.roi_percent, reverse=True)
