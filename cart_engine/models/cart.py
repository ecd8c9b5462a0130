"""Cart models"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .product import Product, ProductVariant


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartItem(BaseModel):
    """Line entry in the cart or the saved-for-later list"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    product_id: str
    variant_id: Optional[str] = None
    quantity: int = Field(ge=1)
    product: Product
    variant: Optional[ProductVariant] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def key(self) -> tuple[str, Optional[str]]:
        """Line identity: one entry per (product, variant) pair"""
        return self.product_id, self.variant_id


class CartState(BaseModel):
    """The persisted cart triple"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[CartItem] = []
    saved_items: list[CartItem] = []
    coupon_code: Optional[str] = None

    @model_validator(mode="after")
    def check_unique_lines(self) -> "CartState":
        for name in ("items", "saved_items"):
            keys = [item.key for item in getattr(self, name)]
            if len(keys) != len(set(keys)):
                raise ValueError(f"duplicate (product, variant) entries in {name}")
        return self


class CartTotals(BaseModel):
    """Totals derived from the current cart, computed on demand"""
    subtotal: int
    discount: int
    shipping: int
    total: int
    item_count: int
    coupon_code: Optional[str] = None
    coupon_applied: bool = False
