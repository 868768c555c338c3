from typing import Any, Callable, List, Optional

from storefront.schemas.line_schema import CartLine
from storefront.schemas.product_schema import ProductOut, VariantOut


class CapacityExceeded(Exception):
    """Adding one more unit would go past the known stock."""

    def __init__(self, item: str, ceiling: int):
        super().__init__(f"No hay más stock disponible: {item} (máx. {ceiling})")
        self.item = item
        self.ceiling = ceiling


def add_or_increment(
    lines: List[Any],
    key: Any,
    key_of: Callable[[Any], Any],
    ceiling: Optional[int],
    label: str,
    build: Callable[[], Any],
):
    """
    Merge-by-identity add shared by the public cart and the admin order.

    If a line with `key` exists its quantity goes up by one, otherwise a new
    line with quantity 1 is appended. Either way the resulting quantity is
    checked against `ceiling` (None = untracked) and CapacityExceeded is
    raised before anything is mutated.
    """
    existing = next((line for line in lines if key_of(line) == key), None)
    current = existing.quantity if existing else 0
    if ceiling is not None and current + 1 > ceiling:
        raise CapacityExceeded(label, ceiling)
    if existing:
        existing.quantity += 1
        return existing
    line = build()
    lines.append(line)
    return line


class Cart:
    """In-memory shopping cart. Lines are keyed by (product_id, variant_name)."""

    def __init__(self):
        self.lines: List[CartLine] = []

    def find(self, product_id: int, variant_name: Optional[str] = None) -> Optional[CartLine]:
        return next((l for l in self.lines if l.key == (product_id, variant_name)), None)

    def add_item(self, product: ProductOut, variant: Optional[VariantOut] = None) -> CartLine:
        label = product.name + (f" ({variant.name})" if variant else "")
        ceiling = variant.stock if variant else product.stock
        return add_or_increment(
            self.lines,
            key=(product.id, variant.name if variant else None),
            key_of=lambda l: l.key,
            ceiling=ceiling,
            label=label,
            build=lambda: CartLine(product=product, variant=variant, quantity=1),
        )

    def remove_item(self, product_id: int, variant_name: Optional[str] = None) -> bool:
        line = self.find(product_id, variant_name)
        if line is None:
            return False
        self.lines.remove(line)
        return True

    def update_quantity(
        self, product_id: int, quantity: int, variant_name: Optional[str] = None
    ) -> Optional[CartLine]:
        # non-positive quantities are stored as given; callers decide to remove
        line = self.find(product_id, variant_name)
        if line is not None:
            line.quantity = quantity
        return line

    def clear(self):
        self.lines = []

    @property
    def total_items(self) -> int:
        return sum(l.quantity for l in self.lines)

    @property
    def total_price(self) -> int:
        return sum(l.unit_price * l.quantity for l in self.lines)

    def to_dict(self) -> dict:
        return {
            "items": [
                {
                    "product_id": l.product.id,
                    "name": l.product.name,
                    "variant_name": l.variant.name if l.variant else None,
                    "unit_price": l.unit_price,
                    "quantity": l.quantity,
                    "subtotal": l.subtotal,
                }
                for l in self.lines
            ],
            "total_items": self.total_items,
            "total_price": self.total_price,
        }
