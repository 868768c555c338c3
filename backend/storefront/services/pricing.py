import math
from typing import Optional

from storefront.config import settings

SUPPORTED_CURRENCIES = ("CLP", "USD")


def _group(n: int, sep: str) -> str:
    return f"{n:,}".replace(",", sep)


def convert_price(price: int, currency: str = "CLP", exchange_rate: Optional[int] = None) -> int:
    """
    Stored prices are CLP. USD is ceil(price / rate) so a converted price
    never shows less than the real cost.
    """
    currency = currency.upper()
    if currency == settings.BASE_CURRENCY:
        return price
    if currency != "USD":
        raise ValueError(f"Unsupported currency: {currency}")
    rate = exchange_rate or settings.USD_EXCHANGE_RATE
    if rate <= 0:
        raise ValueError("Exchange rate must be positive")
    return math.ceil(price / rate)


def format_price(price: int, currency: str = "CLP", exchange_rate: Optional[int] = None) -> str:
    """$15.000 for CLP (es-CL grouping), USD $16 for USD (en-US grouping)."""
    value = convert_price(price, currency, exchange_rate)
    sign = "-" if value < 0 else ""
    if currency.upper() == "USD":
        return f"USD {sign}${_group(abs(value), ',')}"
    return f"{sign}${_group(abs(value), '.')}"
