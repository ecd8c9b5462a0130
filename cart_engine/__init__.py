"""
Storefront Cart Engine

Client-side cart state, pricing and coupon rules shared by the cart drawer,
cart page and checkout.
"""

from .core.container import create_cart_store
from .database import CartRepository, CouponTable, FileStorage, MemoryStorage
from .models import (
    CartItem,
    CartState,
    CartTotals,
    CouponResult,
    CouponRule,
    CouponType,
    Product,
    ProductVariant,
)
from .services import CartStore

__all__ = [
    "create_cart_store",
    "CartStore",
    "CartRepository",
    "CouponTable",
    "FileStorage",
    "MemoryStorage",
    "CartItem",
    "CartState",
    "CartTotals",
    "CouponResult",
    "CouponRule",
    "CouponType",
    "Product",
    "ProductVariant",
]
