from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.repositories.asset_repo import AssetRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.asset_schema import AssetIn, AssetOut
from storefront.schemas.product_schema import ProductIn, ProductOut
from storefront.utils.log import get_logger

log = get_logger("inventory")


class InventoryException(Exception):
    pass


class InventoryService:
    """Admin maintenance of the product catalog and internal assets."""

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.assets = AssetRepository(db)

    def _check_variants(self, data: ProductIn):
        names = [v.name for v in data.variants]
        if len(names) != len(set(names)):
            raise InventoryException("Variant names must be unique within a product")

    def create_product(self, data: ProductIn) -> ProductOut:
        self._check_variants(data)
        try:
            p = self.products.create(data)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise InventoryException(f"Could not create product: {e.orig}") from e
        log.info(f"product created id={p.id} name={p.name!r}")
        return ProductOut.model_validate(p)

    def update_product(self, product_id: int, data: ProductIn) -> ProductOut:
        self._check_variants(data)
        p = self.products.get(product_id)
        if p is None:
            raise InventoryException("Product not found")
        self.products.update(p, data)
        self.db.commit()
        return ProductOut.model_validate(p)

    def delete_product(self, product_id: int):
        p = self.products.get(product_id)
        if p is None:
            raise InventoryException("Product not found")
        self.products.delete(p)
        self.db.commit()

    def reset_clicks(self) -> int:
        n = self.products.reset_clicks()
        self.db.commit()
        log.info(f"click counters reset on {n} product(s)")
        return n

    def create_asset(self, data: AssetIn) -> AssetOut:
        a = self.assets.create(data)
        self.db.commit()
        return AssetOut.model_validate(a)

    def update_asset(self, asset_id: int, data: AssetIn) -> AssetOut:
        a = self.assets.get(asset_id)
        if a is None:
            raise InventoryException("Asset not found")
        self.assets.update(a, data)
        self.db.commit()
        return AssetOut.model_validate(a)

    def delete_asset(self, asset_id: int):
        a = self.assets.get(asset_id)
        if a is None:
            raise InventoryException("Asset not found")
        self.assets.delete(a)
        self.db.commit()
