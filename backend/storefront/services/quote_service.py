import re
from typing import Optional
from urllib.parse import quote

from storefront.schemas.settings_schema import BrandSettingsOut
from storefront.services.cart_service import Cart
from storefront.services.pricing import format_price


class QuoteUnavailable(Exception):
    pass


DEFAULT_HEADER = "Hola *{brand}*, me interesan las siguientes piezas:"
FOOTER = "Quedo atento a su respuesta."


def build_quote_message(
    cart: Cart, brand: BrandSettingsOut, currency: str = "CLP", exchange_rate: Optional[int] = None
) -> str:
    header = (brand.whatsapp_template or DEFAULT_HEADER).replace("{brand}", brand.brand_name or "")
    blocks = []
    for line in cart.lines:
        name = line.product.name + (f" - {line.variant.name}" if line.variant else "")
        blocks.append(
            f"💎 *{name}* (x{line.quantity})\n"
            f"   Precio: {format_price(line.unit_price, currency, exchange_rate)}\n"
            f"   Ref: {str(line.product.id)[:8]}"
        )
    total = format_price(cart.total_price, currency, exchange_rate)
    return f"{header}\n\n" + "\n\n".join(blocks) + f"\n\nTotal Estimado: {total}\n\n{FOOTER}"


def build_quote_link(
    cart: Cart, brand: BrandSettingsOut, currency: str = "CLP", exchange_rate: Optional[int] = None
) -> dict:
    if not brand.whatsapp_number:
        raise QuoteUnavailable("Número de WhatsApp no configurado.")
    if not cart.lines:
        raise QuoteUnavailable("El carrito está vacío.")
    phone = re.sub(r"\D", "", brand.whatsapp_number)
    message = build_quote_message(cart, brand, currency, exchange_rate)
    return {
        "phone": phone,
        "message": message,
        "url": f"https://wa.me/{phone}?text={quote(message)}",
    }
