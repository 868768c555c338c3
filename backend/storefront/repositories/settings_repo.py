from sqlalchemy.orm import Session

from storefront.models.brand_settings import BrandSettings

SETTINGS_ROW_ID = "current"


class SettingsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_or_create(self) -> BrandSettings:
        s = self.db.query(BrandSettings).filter(BrandSettings.id == SETTINGS_ROW_ID).first()
        if s is None:
            s = BrandSettings(id=SETTINGS_ROW_ID)
            self.db.add(s)
            self.db.flush()
        return s

    def update(self, changes: dict) -> BrandSettings:
        s = self.get_or_create()
        for k, v in changes.items():
            setattr(s, k, v)
        self.db.flush()
        return s
