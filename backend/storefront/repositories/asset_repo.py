from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.internal_asset import InternalAsset
from storefront.schemas.asset_schema import AssetIn


class AssetRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, asset_id: int) -> Optional[InternalAsset]:
        return self.db.query(InternalAsset).filter(InternalAsset.id == asset_id).first()

    def list(self) -> List[InternalAsset]:
        return self.db.query(InternalAsset).order_by(InternalAsset.name).all()

    def create(self, data: AssetIn) -> InternalAsset:
        a = InternalAsset(**data.model_dump())
        self.db.add(a)
        self.db.flush()
        return a

    def update(self, asset: InternalAsset, data: AssetIn) -> InternalAsset:
        for k, v in data.model_dump().items():
            setattr(asset, k, v)
        self.db.flush()
        return asset

    def delete(self, asset: InternalAsset):
        self.db.delete(asset)
        self.db.flush()

    def deduct_stock(self, asset_id: int, qty: int) -> bool:
        """Conditional decrement; False when stock < qty. LookupError if missing."""
        row = (
            self.db.query(InternalAsset)
            .filter(InternalAsset.id == asset_id)
            .with_for_update()
            .first()
        )
        if row is None:
            raise LookupError(f"Asset {asset_id} not found")
        updated = (
            self.db.query(InternalAsset)
            .filter(InternalAsset.id == asset_id, InternalAsset.stock >= qty)
            .update({InternalAsset.stock: InternalAsset.stock - qty}, synchronize_session=False)
        )
        self.db.flush()
        return updated == 1

    def restock(self, asset_id: int, qty: int):
        updated = (
            self.db.query(InternalAsset)
            .filter(InternalAsset.id == asset_id)
            .update({InternalAsset.stock: InternalAsset.stock + qty}, synchronize_session=False)
        )
        if updated != 1:
            raise LookupError(f"Asset {asset_id} not found")
        self.db.flush()
