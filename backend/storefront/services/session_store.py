import threading
import time
import uuid
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class MemoryStore(Generic[T]):
    """
    Process-local keyed store for transient state (guest carts, admin order
    drafts). Sync FastAPI handlers run on a thread pool, so every access goes
    through one lock. Entries untouched for longer than the TTL are dropped
    by expire_idle().
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._items: Dict[str, Tuple[T, float]] = {}
        self._lock = threading.RLock()

    def new_key(self) -> str:
        return uuid.uuid4().hex

    def create(self) -> Tuple[str, T]:
        with self._lock:
            key = self.new_key()
            item = self._factory()
            self._items[key] = (item, time.monotonic())
            return key, item

    def get(self, key: Optional[str]) -> Optional[T]:
        if not key:
            return None
        with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return None
            self._items[key] = (entry[0], time.monotonic())
            return entry[0]

    def get_or_create(self, key: Optional[str] = None) -> Tuple[str, T]:
        with self._lock:
            item = self.get(key)
            if item is not None:
                return key, item
            if key:
                item = self._factory()
                self._items[key] = (item, time.monotonic())
                return key, item
            return self.create()

    def discard(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def expire_idle(self, ttl_seconds: int) -> List[str]:
        cutoff = time.monotonic() - ttl_seconds
        with self._lock:
            expired = [k for k, (_, touched) in self._items.items() if touched <= cutoff]
            for k in expired:
                del self._items[k]
            return expired

    def lock(self) -> threading.RLock:
        """Hold while mutating an item so concurrent requests on one key serialize."""
        return self._lock

    def __len__(self) -> int:
        return len(self._items)
