from typing import List

from storefront.schemas.product_schema import ProductOut

TOP_PRODUCTS = 10


def summarize(products: List[ProductOut]) -> dict:
    """Engagement and inventory-valuation figures for the admin dashboard."""
    total_clicks = sum(p.whatsapp_clicks or 0 for p in products)
    top = sorted(products, key=lambda p: p.whatsapp_clicks or 0, reverse=True)[:TOP_PRODUCTS]
    engagement = round(total_clicks / len(products), 1) if products else 0.0

    categories = {}
    for p in products:
        if not p.category:
            continue
        c = categories.setdefault(p.category, {"name": p.category, "value": 0, "clicks": 0, "count": 0})
        c["value"] += p.price * (p.stock or 0)
        c["clicks"] += p.whatsapp_clicks or 0
        c["count"] += 1

    return {
        "total_clicks": total_clicks,
        "engagement_rate": engagement,
        "top_products": [
            {"id": p.id, "name": p.name, "clicks": p.whatsapp_clicks} for p in top
        ],
        "inventory_cost": sum((p.unit_cost or 0) * (p.stock or 0) for p in products),
        "potential_sales": sum(p.price * (p.stock or 0) for p in products),
        "total_units": sum(p.stock or 0 for p in products),
        "categories": sorted(categories.values(), key=lambda c: c["value"], reverse=True),
    }
