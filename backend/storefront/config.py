from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    BASE_CURRENCY: str = "CLP"
    USD_EXCHANGE_RATE: int = 950
    LOW_STOCK_THRESHOLD: int = 2
    DEFAULT_MARKUP: float = 2.5
    STOCK_LOCK_TIMEOUT: int = 10

    # idle carts / admin drafts are dropped after this many seconds
    CART_TTL_SECONDS: int = 3600
    EXPIRE_INTERVAL_SECONDS: int = 60

    SALES_CATEGORY: str = "Ventas"
    DEFAULT_CUSTOMER_NAME: str = "Cliente Mostrador"
    DEFAULT_PAYMENT_METHOD: str = "Transferencia"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
