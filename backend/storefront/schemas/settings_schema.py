from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BrandSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    brand_name: Optional[str] = None
    whatsapp_number: Optional[str] = None
    whatsapp_template: Optional[str] = None
    instagram_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    contact_email: Optional[str] = None
    site_title: Optional[str] = None
    site_description: Optional[str] = None
    usd_exchange_rate: Optional[int] = None
    maintenance_mode: bool = False
    announcement_text: Optional[str] = None
    announcement_color: Optional[str] = None


class BrandSettingsUpdate(BaseModel):
    brand_name: Optional[str] = None
    whatsapp_number: Optional[str] = None
    whatsapp_template: Optional[str] = None
    instagram_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    contact_email: Optional[str] = None
    site_title: Optional[str] = None
    site_description: Optional[str] = None
    usd_exchange_rate: Optional[int] = Field(None, gt=0)
    maintenance_mode: Optional[bool] = None
    announcement_text: Optional[str] = None
    announcement_color: Optional[str] = None
