from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from storefront.db import Base


class BrandSettings(Base):
    __tablename__ = "brand_settings"

    id = Column(String(16), primary_key=True, default="current")
    brand_name = Column(String(128), nullable=True)
    whatsapp_number = Column(String(32), nullable=True)
    whatsapp_template = Column(Text, nullable=True)
    instagram_url = Column(String(256), nullable=True)
    tiktok_url = Column(String(256), nullable=True)
    contact_email = Column(String(128), nullable=True)
    site_title = Column(String(128), nullable=True)
    site_description = Column(Text, nullable=True)
    usd_exchange_rate = Column(Integer, nullable=True)
    maintenance_mode = Column(Boolean, nullable=False, default=False)
    announcement_text = Column(String(256), nullable=True)
    announcement_color = Column(String(16), nullable=True)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
