"""Cart persistence"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from pydantic import ValidationError

from ..models.cart import CartState
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


class CartRepository:
    """
    Mirrors the (items, savedItems, couponCode) triple to durable storage.

    Writes are fire-and-forget: a failing write is logged and never reaches
    the caller, so the in-memory cart stays authoritative for the session.
    With ``background=True`` writes run in order on a single worker thread.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = "cart-storage",
        background: bool = False,
    ):
        self.storage = storage
        self.key = key
        self._executor: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix="cart-persist")
            if background
            else None
        )
        self._pending: Optional[Future] = None

    def load(self) -> Optional[CartState]:
        """Read the persisted cart; None when absent or unreadable"""
        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception(f"Failed to read cart from storage key {self.key!r}")
            return None

        if raw is None:
            return None

        try:
            return CartState.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cart under {self.key!r}: {e.error_count()} errors")
            return None

    @staticmethod
    def serialize(state: CartState) -> bytes:
        """Encode the cart triple as camelCase JSON"""
        return state.model_dump_json(by_alias=True).encode("utf-8")

    def save(self, state: CartState) -> None:
        """Persist a snapshot of the cart"""
        try:
            payload = self.serialize(state)
            if self._executor is not None:
                self._pending = self._executor.submit(self._write, payload)
                return
        except Exception:
            logger.exception(f"Failed to queue cart write for storage key {self.key!r}")
            return
        self._write(payload)

    def _write(self, payload: bytes) -> None:
        try:
            self.storage.set(self.key, payload)
        except Exception:
            logger.exception(f"Failed to persist cart under storage key {self.key!r}")

    def flush(self) -> None:
        """Wait for the last queued background write"""
        if self._pending is not None:
            self._pending.result()

    def close(self) -> None:
        """Finish queued writes and stop the worker"""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
