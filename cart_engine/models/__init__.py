# Cart Engine Models

from .product import Product, ProductVariant
from .cart import CartItem, CartState, CartTotals
from .coupon import CouponRule, CouponType, CouponResult

__all__ = [
    "Product",
    "ProductVariant",
    "CartItem",
    "CartState",
    "CartTotals",
    "CouponRule",
    "CouponType",
    "CouponResult",
]
