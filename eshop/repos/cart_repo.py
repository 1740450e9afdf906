# eshop/repos/cart_repo.py
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, Tuple

from eshop.domain.schemas import Cart
from eshop.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    In-memory cart storage owned by the application.
    Created once at startup and kept for the process lifetime; nothing is persisted.

    Each cart has its own re-entrant lock. Callers mutate a cart only inside
    locked(), which makes get-or-create, validation, mutation and totals one
    critical section for that cart id.
    """

    def __init__(self):
        self._carts: Dict[str, Cart] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def _entry(self, cart_id: str) -> Tuple[Cart, threading.RLock]:
        with self._registry_lock:
            cart = self._carts.get(cart_id)
            if cart is None:
                now = datetime.now(timezone.utc)
                cart = Cart(id=cart_id, created_at=now, updated_at=now)
                self._carts[cart_id] = cart
                self._locks[cart_id] = threading.RLock()
                logger.info(f"Created cart {cart_id}")
            return cart, self._locks[cart_id]

    @contextmanager
    def locked(self, cart_id: str) -> Iterator[Cart]:
        cart, lock = self._entry(cart_id)
        with lock:
            yield cart

    def count(self) -> int:
        with self._registry_lock:
            return len(self._carts)
