# tests/test_pricing.py
import pytest

from cart_engine.models import CartItem, CouponRule, CouponType
from cart_engine.services import pricing

from tests.helpers import make_product, make_variant

PERCENT_10 = CouponRule(code="P10", type=CouponType.PERCENT, value=10, min_subtotal=1000)
FLAT_200 = CouponRule(code="F200", type=CouponType.FLAT, value=200, min_subtotal=0)
SHIP = CouponRule(code="SHIP", type=CouponType.SHIPPING, value=0, min_subtotal=500)


def _item(quantity=1, base_price=1000, sale_price=None, adjustment=None, product_id="prod-1"):
    product = make_product(product_id, base_price=base_price, sale_price=sale_price)
    variant = make_variant(product_id=product_id, adjustment=adjustment) if adjustment is not None else None
    return CartItem(
        id=f"{product_id}-line",
        product_id=product_id,
        variant_id=variant.id if variant else None,
        quantity=quantity,
        product=product,
        variant=variant,
    )


def test_unit_price_uses_base_price():
    assert pricing.unit_price(_item(base_price=999)) == 999


def test_unit_price_prefers_sale_price():
    assert pricing.unit_price(_item(base_price=1000, sale_price=750)) == 750


def test_unit_price_zero_sale_price_is_honoured():
    assert pricing.unit_price(_item(base_price=1000, sale_price=0)) == 0


def test_unit_price_adds_variant_adjustment():
    assert pricing.unit_price(_item(base_price=1000, sale_price=900, adjustment=150)) == 1050
    assert pricing.unit_price(_item(base_price=1000, adjustment=-100)) == 900


def test_subtotal_and_item_count():
    items = [_item(quantity=2, base_price=300), _item(quantity=3, base_price=100, product_id="prod-2")]
    assert pricing.calculate_subtotal(items) == 900
    assert pricing.count_items(items) == 5


def test_empty_cart_totals():
    assert pricing.calculate_subtotal([]) == 0
    assert pricing.count_items([]) == 0


def test_discount_without_coupon_is_zero():
    assert pricing.calculate_discount(5000, None) == 0


def test_percent_discount():
    assert pricing.calculate_discount(2000, PERCENT_10) == 200


@pytest.mark.parametrize(
    "subtotal, expected",
    [
        (1005, 101),  # 100.5 rounds up
        (1004, 100),  # 100.4 rounds down
        (1015, 102),  # 101.5 rounds up
        (1025, 103),  # 102.5 rounds up, not to even
    ],
)
def test_percent_discount_rounds_half_up(subtotal, expected):
    assert pricing.calculate_discount(subtotal, PERCENT_10) == expected


def test_percent_discount_below_minimum_is_zero():
    assert pricing.calculate_discount(999, PERCENT_10) == 0


def test_flat_discount_capped_at_subtotal():
    assert pricing.calculate_discount(150, FLAT_200) == 150
    assert pricing.calculate_discount(1000, FLAT_200) == 200


def test_shipping_coupon_grants_no_discount():
    assert pricing.calculate_discount(1000, SHIP) == 0


def test_shipping_free_at_threshold():
    assert pricing.calculate_shipping(2000, None, free_shipping_threshold=2000, base_fee=80) == 0
    assert pricing.calculate_shipping(1999, None, free_shipping_threshold=2000, base_fee=80) == 80


def test_shipping_coupon_waives_fee_when_eligible():
    assert pricing.calculate_shipping(500, SHIP, free_shipping_threshold=2000, base_fee=80) == 0
    assert pricing.calculate_shipping(499, SHIP, free_shipping_threshold=2000, base_fee=80) == 80


def test_non_shipping_coupon_does_not_waive_fee():
    assert pricing.calculate_shipping(1500, PERCENT_10, free_shipping_threshold=2000, base_fee=80) == 80


def test_total_is_floored_at_zero_before_shipping():
    assert pricing.calculate_total(100, 300, 80) == 80
    assert pricing.calculate_total(2000, 200, 0) == 1800


def test_amount_until_free_shipping():
    assert pricing.amount_until_free_shipping(1500, 2000) == 500
    assert pricing.amount_until_free_shipping(2500, 2000) == 0


def test_summarize_reports_coupon_eligibility():
    items = [_item(quantity=1, base_price=800)]
    totals = pricing.summarize(items, "P10", PERCENT_10, free_shipping_threshold=2000, base_fee=80)
    assert totals.subtotal == 800
    assert totals.discount == 0
    assert totals.shipping == 80
    assert totals.total == 880
    assert totals.item_count == 1
    assert totals.coupon_code == "P10"
    assert totals.coupon_applied is False


def test_summarize_is_idempotent():
    items = [_item(quantity=3, base_price=700)]
    first = pricing.summarize(items, "P10", PERCENT_10, free_shipping_threshold=2000, base_fee=80)
    second = pricing.summarize(items, "P10", PERCENT_10, free_shipping_threshold=2000, base_fee=80)
    assert first == second
    assert first.discount == 210
    assert first.total == 2100 - 210
