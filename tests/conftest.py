# tests/conftest.py
import pytest

from cart_engine.core.config import Settings
from cart_engine.database.carts import CartRepository
from cart_engine.database.coupons import CouponTable
from cart_engine.database.storage import MemoryStorage
from cart_engine.models import Product
from cart_engine.services.cart_store import CartStore

from tests.helpers import BASE_SHIPPING_FEE, FREE_SHIPPING_THRESHOLD, make_product


# ---------- Fixtures ----------
@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        free_shipping_threshold=FREE_SHIPPING_THRESHOLD,
        base_shipping_fee=BASE_SHIPPING_FEE,
        storage_key="cart-storage",
    )


@pytest.fixture
def coupons() -> CouponTable:
    return CouponTable()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def repository(storage, settings) -> CartRepository:
    return CartRepository(storage, key=settings.storage_key)


@pytest.fixture
def store(coupons, settings, repository) -> CartStore:
    return CartStore(coupons=coupons, settings=settings, repository=repository)


@pytest.fixture
def product() -> Product:
    return make_product()
