#!/usr/bin/env python3
"""
Seed the catalog and internal assets from a JSON file.
Entries already present (same name) are left alone, so the script can be
re-run safely.

Usage:
    python scripts/seed_products.py --file catalog.json
    python scripts/seed_products.py            # built-in demo catalog

JSON shape:
    {"products": [{"name": ..., "price": ..., "stock": ..., "variants": [...]}],
     "assets":   [{"name": ..., "category": ..., "stock": ..., "min_stock": ...}]}
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.models.internal_asset import InternalAsset
from storefront.models.product import Product
from storefront.schemas.asset_schema import AssetIn
from storefront.schemas.product_schema import ProductIn
from storefront.services.inventory_service import InventoryService

DEMO_CATALOG = {
    "products": [
        {"name": "Anillo Luna", "price": 45000, "unit_cost": 18000, "stock": 4,
         "category": "Anillos", "collection": "Celeste",
         "variants": [
             {"name": "Plata 950", "price": 45000, "stock": 3, "is_primary": True},
             {"name": "Oro 18k", "price": 180000, "stock": 1},
         ]},
        {"name": "Aros Gota", "price": 15000, "unit_cost": 6000, "stock": 10,
         "category": "Aros", "collection": "Agua"},
        {"name": "Collar Raíz", "price": 60000, "unit_cost": 25000, "stock": None,
         "category": "Collares", "status": "Por Encargo"},
    ],
    "assets": [
        {"name": "Caja kraft pequeña", "category": "Empaque", "stock": 40, "min_stock": 10, "unit_cost": 350},
        {"name": "Bolsa de tela", "category": "Empaque", "stock": 25, "min_stock": 5, "unit_cost": 500},
    ],
}


def _normalize_product(entry: dict) -> dict:
    """Accept a couple of legacy key names used by older exports."""
    out = dict(entry)
    if "price" not in out:
        out["price"] = int(out.pop("price_clp", 0) or 0)
    if "stock" in out and out["stock"] is not None:
        out["stock"] = max(0, int(out["stock"]))
    variants = out.get("variants") or []
    out["variants"] = [
        {**v, "is_primary": v.get("is_primary", v.get("isPrimary", False))} for v in variants
    ]
    for v in out["variants"]:
        v.pop("isPrimary", None)
    return out


def seed(data: dict) -> tuple:
    db = SessionLocal()
    created_products = created_assets = 0
    try:
        svc = InventoryService(db)
        for entry in data.get("products", []):
            entry = _normalize_product(entry)
            if db.query(Product).filter(Product.name == entry["name"]).first():
                continue
            svc.create_product(ProductIn(**entry))
            created_products += 1
        for entry in data.get("assets", []):
            if db.query(InternalAsset).filter(InternalAsset.name == entry["name"]).first():
                continue
            svc.create_asset(AssetIn(**entry))
            created_assets += 1
    finally:
        db.close()
    return created_products, created_assets


def main():
    parser = argparse.ArgumentParser(description="Seed products and internal assets")
    parser.add_argument("--file", help="JSON file with products/assets", default=None)
    parser.add_argument("--reset", action="store_true", help="drop and recreate tables first")
    args = parser.parse_args()

    init_db(reset=args.reset)
    if args.file:
        with open(args.file, encoding="utf-8") as fh:
            data = json.load(fh)
    else:
        data = DEMO_CATALOG

    products, assets = seed(data)
    print(f"Seeded {products} product(s) and {assets} asset(s).")


if __name__ == "__main__":
    main()
