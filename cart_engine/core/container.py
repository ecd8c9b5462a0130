"""Wiring for the single cart store of a running application"""

import logging
from typing import Optional

from ..database.carts import CartRepository
from ..database.coupons import CouponTable, coupon_table
from ..database.storage import FileStorage, KeyValueStorage, MemoryStorage
from ..services.cart_store import CartStore
from .config import Settings, get_settings
from .logging import configure_logging

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> KeyValueStorage:
    """File storage when a directory is configured, otherwise memory"""
    if settings.storage_dir:
        return FileStorage(settings.storage_dir)
    logger.warning("No storage directory configured - cart will not survive restarts")
    return MemoryStorage()


def build_coupon_table(settings: Settings) -> CouponTable:
    if settings.coupon_rules_path:
        return CouponTable.from_file(settings.coupon_rules_path)
    return coupon_table


def create_cart_store(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> CartStore:
    """
    Build the cart store for one application instance.

    Args:
        settings: Engine settings; the cached environment settings by default
        storage: Host-provided key-value storage; built from settings if omitted

    Returns:
        A store rehydrated from storage and ready for mutations
    """
    settings = settings if settings is not None else get_settings()
    configure_logging(settings)

    repository = CartRepository(
        storage if storage is not None else build_storage(settings),
        key=settings.storage_key,
        background=settings.persist_in_background,
    )
    store = CartStore(
        coupons=build_coupon_table(settings),
        settings=settings,
        repository=repository,
    )
    logger.info(f"{settings.app_name} cart store ready")
    return store
