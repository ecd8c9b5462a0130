"""
Cart pricing.

Pure functions over cart lines and the active coupon rule. Amounts are whole
currency units; percentage discounts round half up to the nearest unit.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from ..models.cart import CartItem, CartTotals
from ..models.coupon import CouponRule, CouponType


def unit_price(item: CartItem) -> int:
    """Effective product price plus the variant adjustment, if any"""
    price = item.product.effective_price
    if item.variant is not None:
        price += item.variant.price_adjustment
    return price


def line_total(item: CartItem) -> int:
    return unit_price(item) * item.quantity


def calculate_subtotal(items: Iterable[CartItem]) -> int:
    return sum(line_total(item) for item in items)


def count_items(items: Iterable[CartItem]) -> int:
    """Total quantity across lines (badge count)"""
    return sum(item.quantity for item in items)


def round_half_up(amount: Decimal) -> int:
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def eligible_coupon(subtotal: int, rule: Optional[CouponRule]) -> Optional[CouponRule]:
    """The rule if it meets its minimum spend against this subtotal"""
    if rule is None or not rule.is_eligible(subtotal):
        return None
    return rule


def calculate_discount(subtotal: int, rule: Optional[CouponRule]) -> int:
    """
    Discount granted by the coupon for this subtotal.

    Zero when there is no coupon, the coupon is below its minimum spend,
    or the coupon only waives shipping. Flat discounts never exceed the subtotal.
    """
    rule = eligible_coupon(subtotal, rule)
    if rule is None:
        return 0

    if rule.type == CouponType.PERCENT:
        return round_half_up(Decimal(subtotal) * Decimal(rule.value) / Decimal(100))
    if rule.type == CouponType.FLAT:
        return min(rule.value, subtotal)
    return 0


def calculate_shipping(
    subtotal: int,
    rule: Optional[CouponRule],
    *,
    free_shipping_threshold: int,
    base_fee: int,
) -> int:
    """Free at or above the threshold or with an eligible shipping coupon"""
    if subtotal >= free_shipping_threshold:
        return 0
    rule = eligible_coupon(subtotal, rule)
    if rule is not None and rule.type == CouponType.SHIPPING:
        return 0
    return base_fee


def calculate_total(subtotal: int, discount: int, shipping: int) -> int:
    return max(subtotal - discount, 0) + shipping


def amount_until_free_shipping(subtotal: int, free_shipping_threshold: int) -> int:
    return max(free_shipping_threshold - subtotal, 0)


def summarize(
    items: Iterable[CartItem],
    coupon_code: Optional[str],
    rule: Optional[CouponRule],
    *,
    free_shipping_threshold: int,
    base_fee: int,
) -> CartTotals:
    """Compute every derived total for one cart state in a single pass"""
    items = list(items)
    subtotal = calculate_subtotal(items)
    discount = calculate_discount(subtotal, rule)
    shipping = calculate_shipping(
        subtotal,
        rule,
        free_shipping_threshold=free_shipping_threshold,
        base_fee=base_fee,
    )
    return CartTotals(
        subtotal=subtotal,
        discount=discount,
        shipping=shipping,
        total=calculate_total(subtotal, discount, shipping),
        item_count=count_items(items),
        coupon_code=coupon_code,
        coupon_applied=eligible_coupon(subtotal, rule) is not None,
    )
