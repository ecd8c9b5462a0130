"""Coupon models"""

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class CouponType(str, Enum):
    PERCENT = "percent"
    FLAT = "flat"
    SHIPPING = "shipping"


class CouponRule(BaseModel):
    """A coupon code with its discount type and minimum spend"""
    model_config = ConfigDict(frozen=True)

    code: str
    type: CouponType
    value: int = Field(ge=0)
    min_subtotal: int = Field(default=0, ge=0)
    description: str = ""

    def is_eligible(self, subtotal: int) -> bool:
        return subtotal >= self.min_subtotal


class CouponResult(BaseModel):
    """Outcome of applying a coupon, rendered by the UI as a toast"""
    success: bool
    message: str
    code: str = ""
