from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.repositories.settings_repo import SettingsRepository
from storefront.schemas.settings_schema import BrandSettingsOut, BrandSettingsUpdate


class BrandService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository(db)

    def get(self) -> BrandSettingsOut:
        s = self.repo.get_or_create()
        self.db.commit()
        return BrandSettingsOut.model_validate(s)

    def update(self, changes: BrandSettingsUpdate) -> BrandSettingsOut:
        s = self.repo.update(changes.model_dump(exclude_unset=True))
        self.db.commit()
        return BrandSettingsOut.model_validate(s)

    def exchange_rate(self) -> int:
        return self.get().usd_exchange_rate or settings.USD_EXCHANGE_RATE
