"""
Cart store.

Owns the cart triple (items, saved items, coupon code). Every mutation is a
synchronous, self-contained transition; derived totals are recomputed from the
current state on each read and never stored.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ..core.config import Settings, get_settings
from ..database.carts import CartRepository
from ..database.coupons import CouponTable, coupon_table, normalize_code
from ..models.cart import CartItem, CartState, CartTotals
from ..models.coupon import CouponResult, CouponRule, CouponType
from ..models.product import Product, ProductVariant
from . import pricing

logger = logging.getLogger(__name__)

Listener = Callable[["CartStore"], None]


def _new_item_id(product_id: str, variant_id: Optional[str]) -> str:
    return f"{product_id}-{variant_id or 'base'}-{uuid.uuid4().hex[:12]}"


def _find(
    items: list[CartItem],
    *,
    item_id: Optional[str] = None,
    key: Optional[tuple[str, Optional[str]]] = None,
) -> int:
    """Index of the matching line, or -1"""
    for index, item in enumerate(items):
        if item_id is not None and item.id == item_id:
            return index
        if key is not None and item.key == key:
            return index
    return -1


class CartStore:
    """Client-side cart state container"""

    def __init__(
        self,
        coupons: Optional[CouponTable] = None,
        settings: Optional[Settings] = None,
        repository: Optional[CartRepository] = None,
    ):
        self.coupons = coupons if coupons is not None else coupon_table
        self.settings = settings if settings is not None else get_settings()
        self.repository = repository
        self.is_open = False
        self._listeners: list[Listener] = []
        self._state = self._rehydrate()

    def _rehydrate(self) -> CartState:
        """Restore the persisted triple once, before any mutation"""
        state = self.repository.load() if self.repository else None
        if state is None:
            logger.info("Starting with an empty cart")
            return CartState()

        if state.coupon_code is not None and state.coupon_code not in self.coupons:
            logger.warning(f"Dropping unknown coupon {state.coupon_code!r} from restored cart")
            state.coupon_code = None
        else:
            state.coupon_code = normalize_code(state.coupon_code) or None

        logger.info(
            f"Restored cart with {len(state.items)} items and {len(state.saved_items)} saved items"
        )
        return state

    # ==================== State access ====================

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._state.items)

    @property
    def saved_items(self) -> tuple[CartItem, ...]:
        return tuple(self._state.saved_items)

    @property
    def coupon_code(self) -> Optional[str]:
        return self._state.coupon_code

    def snapshot(self) -> CartState:
        """Copy of the persisted triple"""
        return CartState(
            items=list(self._state.items),
            saved_items=list(self._state.saved_items),
            coupon_code=self._state.coupon_code,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every state change; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ==================== Cart lines ====================

    def add_item(
        self,
        product: Product,
        quantity: int = 1,
        variant: Optional[ProductVariant] = None,
    ) -> None:
        """Add a product, accumulating onto an existing line for the same variant"""
        if quantity < 1:
            raise ValueError(f"quantity must be a positive integer, got {quantity}")

        variant_id = variant.id if variant else None
        items = list(self._state.items)
        index = _find(items, key=(product.id, variant_id))

        if index > -1:
            existing = items[index]
            items[index] = existing.model_copy(
                update={"quantity": existing.quantity + quantity, "updated_at": _now()}
            )
        else:
            items.append(
                CartItem(
                    id=_new_item_id(product.id, variant_id),
                    product_id=product.id,
                    variant_id=variant_id,
                    quantity=quantity,
                    product=product,
                    variant=variant,
                )
            )

        self._state.items = items
        self._commit()

    def remove_item(self, item_id: str) -> None:
        items = [item for item in self._state.items if item.id != item_id]
        if len(items) == len(self._state.items):
            return
        self._state.items = items
        self._commit()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            self.remove_item(item_id)
            return

        items = list(self._state.items)
        index = _find(items, item_id=item_id)
        if index == -1:
            return

        items[index] = items[index].model_copy(update={"quantity": quantity, "updated_at": _now()})
        self._state.items = items
        self._commit()

    def clear_cart(self) -> None:
        """Empty the cart and drop the coupon; saved items are kept"""
        self._state.items = []
        self._state.coupon_code = None
        self._commit()

    # ==================== Save for later ====================

    def save_for_later(self, item_id: str) -> None:
        items = list(self._state.items)
        index = _find(items, item_id=item_id)
        if index == -1:
            return

        item = items.pop(index)
        self._state.saved_items = _merge(list(self._state.saved_items), item, fresh_id=False)
        self._state.items = items
        self._commit()

    def move_to_cart(self, item_id: str) -> None:
        saved_items = list(self._state.saved_items)
        index = _find(saved_items, item_id=item_id)
        if index == -1:
            return

        item = saved_items.pop(index)
        self._state.items = _merge(list(self._state.items), item, fresh_id=True)
        self._state.saved_items = saved_items
        self._commit()

    def remove_saved_item(self, item_id: str) -> None:
        saved_items = [item for item in self._state.saved_items if item.id != item_id]
        if len(saved_items) == len(self._state.saved_items):
            return
        self._state.saved_items = saved_items
        self._commit()

    # ==================== Coupons ====================

    def apply_coupon(self, code: str) -> CouponResult:
        """Validate a code against the rule table and the current subtotal"""
        normalized = normalize_code(code)
        if not normalized:
            return CouponResult(success=False, message="Please enter a coupon code")

        rule = self.coupons.get(normalized)
        if rule is None:
            logger.info(f"Rejected unknown coupon {normalized!r}")
            return CouponResult(success=False, message="Invalid coupon code", code=normalized)

        if not rule.is_eligible(self.subtotal):
            logger.info(f"Rejected coupon {normalized!r}: subtotal {self.subtotal} below {rule.min_subtotal}")
            return CouponResult(
                success=False,
                message=(
                    f"Minimum order of {self.settings.currency_symbol}{rule.min_subtotal} "
                    f"required for {normalized}"
                ),
                code=normalized,
            )

        self._state.coupon_code = normalized
        self._commit()
        logger.info(f"Applied coupon {normalized!r}")

        if rule.type == CouponType.SHIPPING:
            return CouponResult(success=True, message="Free shipping applied!", code=normalized)
        return CouponResult(success=True, message=f"Coupon {normalized} applied!", code=normalized)

    def remove_coupon(self) -> None:
        self._state.coupon_code = None
        self._commit()

    @property
    def active_coupon(self) -> Optional[CouponRule]:
        if self._state.coupon_code is None:
            return None
        return self.coupons.get(self._state.coupon_code)

    # ==================== Drawer visibility (not persisted) ====================

    def open_cart(self) -> None:
        self.is_open = True
        self._notify()

    def close_cart(self) -> None:
        self.is_open = False
        self._notify()

    def toggle_cart(self) -> None:
        self.is_open = not self.is_open
        self._notify()

    # ==================== Derived totals ====================

    @property
    def subtotal(self) -> int:
        return pricing.calculate_subtotal(self._state.items)

    @property
    def discount(self) -> int:
        return pricing.calculate_discount(self.subtotal, self.active_coupon)

    @property
    def shipping(self) -> int:
        return pricing.calculate_shipping(
            self.subtotal,
            self.active_coupon,
            free_shipping_threshold=self.settings.free_shipping_threshold,
            base_fee=self.settings.base_shipping_fee,
        )

    @property
    def total(self) -> int:
        return pricing.calculate_total(self.subtotal, self.discount, self.shipping)

    @property
    def item_count(self) -> int:
        return pricing.count_items(self._state.items)

    @property
    def amount_until_free_shipping(self) -> int:
        return pricing.amount_until_free_shipping(
            self.subtotal, self.settings.free_shipping_threshold
        )

    def summary(self) -> CartTotals:
        return pricing.summarize(
            self._state.items,
            self._state.coupon_code,
            self.active_coupon,
            free_shipping_threshold=self.settings.free_shipping_threshold,
            base_fee=self.settings.base_shipping_fee,
        )

    # ==================== Side effects ====================

    def flush(self) -> None:
        """Wait until queued storage writes have landed"""
        if self.repository is not None:
            self.repository.flush()

    def close(self) -> None:
        """Finish pending storage writes and release the write worker"""
        if self.repository is not None:
            self.repository.close()

    def _commit(self) -> None:
        if self.repository is not None:
            self.repository.save(self.snapshot())
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener failed")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _merge(target: list[CartItem], item: CartItem, *, fresh_id: bool) -> list[CartItem]:
    """Accumulate item into a matching line of target, or append it"""
    index = _find(target, key=item.key)
    if index > -1:
        existing = target[index]
        target[index] = existing.model_copy(
            update={"quantity": existing.quantity + item.quantity, "updated_at": _now()}
        )
        return target

    if fresh_id:
        item = item.model_copy(
            update={"id": _new_item_id(item.product_id, item.variant_id), "updated_at": _now()}
        )
    target.append(item)
    return target
