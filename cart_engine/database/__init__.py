# Storage modules

from .coupons import coupon_table, CouponTable, COUPONS, normalize_code
from .storage import KeyValueStorage, MemoryStorage, FileStorage
from .carts import CartRepository

__all__ = [
    "coupon_table",
    "CouponTable",
    "COUPONS",
    "normalize_code",
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "CartRepository",
]
