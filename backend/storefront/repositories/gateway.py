import os
import tempfile
from datetime import date
from typing import List, Optional

from filelock import FileLock, Timeout
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.models.transaction import TransactionType
from storefront.repositories.asset_repo import AssetRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.transaction_repo import TransactionRepository
from storefront.schemas.asset_schema import AssetOut
from storefront.schemas.product_schema import ProductOut
from storefront.schemas.transaction_schema import TransactionIn, TransactionOut
from storefront.utils.log import get_logger
from storefront.utils.transactions import smart_transaction

log = get_logger("gateway")


class GatewayError(Exception):
    pass


class NotFound(GatewayError):
    pass


class InsufficientStock(GatewayError):
    """Stock at call time is lower than the requested quantity."""

    def __init__(self, message: str, item: str = "", requested: int = 0):
        super().__init__(message)
        self.item = item
        self.requested = requested


class ValidationError(GatewayError):
    pass


class TransientIOError(GatewayError):
    """Lock timeout or database availability failure."""
    pass


class PersistenceGateway:
    """
    The storage boundary used by the cart and order workflows.

    Reads return pydantic snapshots (ProductOut, AssetOut) so callers never
    hold live ORM rows across requests. Every stock mutation runs under a
    per-item file lock and a single conditional UPDATE, which is what keeps
    concurrent sales from over-drawing stock.
    """

    def __init__(self, db: Session, lock_timeout: Optional[int] = None):
        self.db = db
        self.products = ProductRepository(db)
        self.assets = AssetRepository(db)
        self.transactions = TransactionRepository(db)
        self.lock_timeout = lock_timeout or settings.STOCK_LOCK_TIMEOUT

    def _lock(self, kind: str, item_id: int) -> FileLock:
        locks_dir = os.path.join(tempfile.gettempdir(), "storefront_locks")
        os.makedirs(locks_dir, exist_ok=True)
        return FileLock(os.path.join(locks_dir, f"{kind}_{item_id}.lock"))

    # --- reads ---

    def list_products(self, q: Optional[str] = None, category: Optional[str] = None) -> List[ProductOut]:
        try:
            self.db.expire_all()
            return [ProductOut.model_validate(p) for p in self.products.list(q=q, category=category)]
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Failed to fetch products: {e}") from e

    def get_product(self, product_id: int) -> ProductOut:
        p = self.products.get(product_id)
        if p is None:
            raise NotFound(f"Product {product_id} not found")
        return ProductOut.model_validate(p)

    def list_assets(self) -> List[AssetOut]:
        try:
            self.db.expire_all()
            return [AssetOut.model_validate(a) for a in self.assets.list()]
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Failed to fetch assets: {e}") from e

    def get_asset(self, asset_id: int) -> AssetOut:
        a = self.assets.get(asset_id)
        if a is None:
            raise NotFound(f"Asset {asset_id} not found")
        return AssetOut.model_validate(a)

    # --- stock ---

    def deduct_product_stock(self, product_id: int, quantity: int, variant_name: Optional[str] = None):
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        label = f"product {product_id}" + (f" ({variant_name})" if variant_name else "")
        try:
            with self._lock("product", product_id).acquire(timeout=self.lock_timeout):
                with smart_transaction(self.db):
                    ok = self.products.deduct_stock(product_id, quantity, variant_name)
        except LookupError as e:
            self.db.rollback()
            raise NotFound(str(e)) from e
        except Timeout as e:
            raise TransientIOError(f"Could not acquire stock lock for {label}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Stock update failed for {label}: {e}") from e
        if not ok:
            raise InsufficientStock(f"Not enough stock for {label}", item=label, requested=quantity)
        log.debug(f"deducted {quantity} from {label}")

    def deduct_asset_stock(self, asset_id: int, quantity: int):
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        label = f"asset {asset_id}"
        try:
            with self._lock("asset", asset_id).acquire(timeout=self.lock_timeout):
                with smart_transaction(self.db):
                    ok = self.assets.deduct_stock(asset_id, quantity)
        except LookupError as e:
            self.db.rollback()
            raise NotFound(str(e)) from e
        except Timeout as e:
            raise TransientIOError(f"Could not acquire stock lock for {label}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Stock update failed for {label}: {e}") from e
        if not ok:
            raise InsufficientStock(f"Not enough stock for {label}", item=label, requested=quantity)
        log.debug(f"deducted {quantity} from {label}")

    def restock_product(self, product_id: int, quantity: int, variant_name: Optional[str] = None):
        """Inverse of deduct_product_stock, used to compensate a failed sale."""
        try:
            with self._lock("product", product_id).acquire(timeout=self.lock_timeout):
                with smart_transaction(self.db):
                    self.products.restock(product_id, quantity, variant_name)
        except LookupError as e:
            self.db.rollback()
            raise NotFound(str(e)) from e
        except Timeout as e:
            raise TransientIOError(f"Could not acquire stock lock for product {product_id}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Restock failed for product {product_id}: {e}") from e

    def restock_asset(self, asset_id: int, quantity: int):
        try:
            with self._lock("asset", asset_id).acquire(timeout=self.lock_timeout):
                with smart_transaction(self.db):
                    self.assets.restock(asset_id, quantity)
        except LookupError as e:
            self.db.rollback()
            raise NotFound(str(e)) from e
        except Timeout as e:
            raise TransientIOError(f"Could not acquire stock lock for asset {asset_id}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Restock failed for asset {asset_id}: {e}") from e

    # --- ledger ---

    def create_transaction(self, entry: TransactionIn) -> TransactionOut:
        description = (entry.description or "").strip()
        if not description:
            raise ValidationError("La descripción es obligatoria")
        if not entry.amount or entry.amount <= 0:
            raise ValidationError("El monto debe ser mayor a 0")
        if not isinstance(entry.type, TransactionType):
            raise ValidationError("Tipo de transacción inválido")
        try:
            with smart_transaction(self.db):
                t = self.transactions.add(
                    description=description[:255],
                    amount=entry.amount,
                    type=entry.type,
                    category=entry.category or "Varios",
                    on=entry.date or date.today(),
                )
            return TransactionOut.model_validate(t)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Failed to save transaction: {e}") from e

    # --- engagement ---

    def increment_click(self, product_id: int):
        try:
            with smart_transaction(self.db):
                found = self.products.increment_clicks(product_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise TransientIOError(f"Failed to record click: {e}") from e
        if not found:
            raise NotFound(f"Product {product_id} not found")
