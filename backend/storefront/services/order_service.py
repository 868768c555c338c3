import threading
from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel

from storefront.config import settings
from storefront.models.transaction import TransactionType
from storefront.repositories.gateway import GatewayError, PersistenceGateway
from storefront.schemas.asset_schema import AssetOut
from storefront.schemas.line_schema import AssetOrderLine, OrderLine
from storefront.schemas.product_schema import ProductOut, VariantOut
from storefront.schemas.transaction_schema import TransactionIn, TransactionOut
from storefront.services.cart_service import Cart, add_or_increment
from storefront.utils.log import get_logger

log = get_logger("orders")

DESCRIPTION_MAX_LENGTH = 100


class OrderSubmissionError(Exception):
    """
    Raised when a sale could not be completed. Stock already deducted for the
    failed attempt has been put back unless listed in compensation_failures.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None, compensation_failures: Optional[List[str]] = None):
        super().__init__(message)
        self.cause = cause
        self.compensation_failures = compensation_failures or []


class SubmissionInProgress(Exception):
    """The draft is being submitted; it cannot be edited or submitted again."""
    pass


class SubmissionResult(BaseModel):
    transaction: TransactionOut
    products: Optional[List[ProductOut]] = None
    assets: Optional[List[AssetOut]] = None


class OrderComposer:
    """
    Admin point-of-sale draft: sellable product lines (a Cart) plus internal
    asset lines (packaging, supplies) consumed by the sale. Asset lines move
    stock but never add to the amount charged.

    Each draft carries its own lock. While submit() runs the draft is frozen:
    edits and a second submit raise SubmissionInProgress.
    """

    def __init__(self, customer_name: str = "", payment_method: Optional[str] = None):
        self.cart = Cart()
        self.asset_lines: List[AssetOrderLine] = []
        self.customer_name = customer_name
        self.payment_method = payment_method or settings.DEFAULT_PAYMENT_METHOD
        self._lock = threading.RLock()
        self._submitting = False

    @property
    def lines(self) -> List[OrderLine]:
        return self.cart.lines

    @property
    def submitting(self) -> bool:
        return self._submitting

    def _ensure_editable(self):
        if self._submitting:
            raise SubmissionInProgress("La venta se está procesando")

    def set_details(self, customer_name: Optional[str] = None, payment_method: Optional[str] = None):
        with self._lock:
            self._ensure_editable()
            if customer_name is not None:
                self.customer_name = customer_name
            if payment_method is not None:
                self.payment_method = payment_method

    # --- product lines ---

    def add_product_line(self, product: ProductOut, variant: Optional[VariantOut] = None) -> OrderLine:
        with self._lock:
            self._ensure_editable()
            return self.cart.add_item(product, variant)

    def decrease_product_line(self, product_id: int, variant_name: Optional[str] = None) -> Optional[OrderLine]:
        with self._lock:
            self._ensure_editable()
            line = self.cart.find(product_id, variant_name)
            if line is None:
                return None
            if line.quantity > 1:
                line.quantity -= 1
                return line
            self.cart.remove_item(product_id, variant_name)
            return None

    def remove_product_line(self, index: int) -> OrderLine:
        with self._lock:
            self._ensure_editable()
            if index < 0 or index >= len(self.lines):
                raise IndexError(f"No product line at position {index}")
            return self.lines.pop(index)

    # --- asset lines ---

    def find_asset_line(self, asset_id: int) -> Optional[AssetOrderLine]:
        return next((l for l in self.asset_lines if l.asset.id == asset_id), None)

    def add_asset_line(self, asset: AssetOut) -> AssetOrderLine:
        with self._lock:
            self._ensure_editable()
            return add_or_increment(
                self.asset_lines,
                key=asset.id,
                key_of=lambda l: l.asset.id,
                ceiling=asset.stock,
                label=asset.name,
                build=lambda: AssetOrderLine(asset=asset, quantity=1),
            )

    def decrease_asset_line(self, asset_id: int) -> Optional[AssetOrderLine]:
        with self._lock:
            self._ensure_editable()
            line = self.find_asset_line(asset_id)
            if line is None:
                return None
            if line.quantity > 1:
                line.quantity -= 1
                return line
            self.asset_lines.remove(line)
            return None

    def remove_asset_line(self, index: int) -> AssetOrderLine:
        with self._lock:
            self._ensure_editable()
            if index < 0 or index >= len(self.asset_lines):
                raise IndexError(f"No asset line at position {index}")
            return self.asset_lines.pop(index)

    # --- totals ---

    def compute_total(self) -> int:
        return self.cart.total_price

    def build_description(self) -> str:
        customer = self.customer_name.strip() or settings.DEFAULT_CUSTOMER_NAME
        items = ", ".join(f"{l.quantity}x {l.product.name}" for l in self.lines)
        return f"Venta: {customer} - {items}"[:DESCRIPTION_MAX_LENGTH]

    def clear(self):
        with self._lock:
            self.cart.clear()
            self.asset_lines = []
            self.customer_name = ""

    # --- submission ---

    def submit(self, gateway: PersistenceGateway) -> Optional[SubmissionResult]:
        """
        Deduct stock for every product line, then every asset line, then
        record one income transaction for the charged total.

        Calls are issued one at a time in line order. If any step fails the
        deductions applied so far are re-added in reverse order, the draft
        is left untouched and OrderSubmissionError is raised. An empty draft
        is a no-op and returns None. A submit that overlaps another one on
        the same draft raises SubmissionInProgress without touching stock.
        """
        with self._lock:
            self._ensure_editable()
            if not self.lines:
                return None
            self._submitting = True
        try:
            return self._submit(gateway)
        finally:
            with self._lock:
                self._submitting = False

    def _submit(self, gateway: PersistenceGateway) -> SubmissionResult:
        applied: List[Tuple[str, int, int, Optional[str]]] = []
        try:
            for line in self.lines:
                variant_name = line.variant.name if line.variant else None
                gateway.deduct_product_stock(line.product.id, line.quantity, variant_name)
                applied.append(("product", line.product.id, line.quantity, variant_name))
            for aline in self.asset_lines:
                gateway.deduct_asset_stock(aline.asset.id, aline.quantity)
                applied.append(("asset", aline.asset.id, aline.quantity, None))

            total = self.compute_total()
            transaction = gateway.create_transaction(
                TransactionIn(
                    description=self.build_description(),
                    amount=total,
                    type=TransactionType.INCOME,
                    category=settings.SALES_CATEGORY,
                    date=date.today(),
                )
            )
        except GatewayError as e:
            log.warning(f"submission failed after {len(applied)} deduction(s): {e}")
            failures = self._compensate(gateway, applied)
            raise OrderSubmissionError("Error al procesar la venta", cause=e, compensation_failures=failures) from e
        except Exception as e:
            log.error(f"unexpected submission failure after {len(applied)} deduction(s): {type(e).__name__}: {e}")
            failures = self._compensate(gateway, applied)
            if failures:
                log.error(f"stock not restored for: {', '.join(failures)}")
            raise

        log.info(f"sale recorded: transaction={transaction.id} amount={transaction.amount}")
        self.clear()

        result = SubmissionResult(transaction=transaction)
        try:
            result.products = gateway.list_products()
            result.assets = gateway.list_assets()
        except GatewayError as e:
            # the sale itself is committed; only the refreshed snapshot is missing
            log.warning(f"inventory reload after sale failed: {e}")
        return result

    def _compensate(self, gateway: PersistenceGateway, applied: List[Tuple[str, int, int, Optional[str]]]) -> List[str]:
        failures = []
        for kind, item_id, qty, variant_name in reversed(applied):
            try:
                if kind == "product":
                    gateway.restock_product(item_id, qty, variant_name)
                else:
                    gateway.restock_asset(item_id, qty)
                log.info(f"compensated {kind} {item_id} +{qty}")
            except GatewayError as e:
                log.error(f"compensation failed for {kind} {item_id} +{qty}: {e}")
                failures.append(f"{kind} {item_id} +{qty}")
        return failures

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "customer_name": self.customer_name,
                "payment_method": self.payment_method,
                "submitting": self._submitting,
                "lines": self.cart.to_dict()["items"],
                "asset_lines": [
                    {
                        "asset_id": l.asset.id,
                        "name": l.asset.name,
                        "quantity": l.quantity,
                        "unit_cost": l.asset.unit_cost,
                    }
                    for l in self.asset_lines
                ],
                "total": self.compute_total(),
            }
