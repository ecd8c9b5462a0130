"""Coupon rule table"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from ..core.exceptions import CouponConfigurationError
from ..models.coupon import CouponRule, CouponType

logger = logging.getLogger(__name__)

# Built-in coupon catalog
COUPONS: dict[str, CouponRule] = {
    "SAVE10": CouponRule(
        code="SAVE10",
        type=CouponType.PERCENT,
        value=10,
        min_subtotal=1000,
        description="10% off orders of 1000 or more",
    ),
    "WELCOME20": CouponRule(
        code="WELCOME20",
        type=CouponType.PERCENT,
        value=20,
        min_subtotal=3000,
        description="20% off your first order of 3000 or more",
    ),
    "FLAT200": CouponRule(
        code="FLAT200",
        type=CouponType.FLAT,
        value=200,
        min_subtotal=1500,
        description="200 off orders of 1500 or more",
    ),
    "FREESHIP": CouponRule(
        code="FREESHIP",
        type=CouponType.SHIPPING,
        value=0,
        min_subtotal=500,
        description="Free shipping on orders of 500 or more",
    ),
}


def normalize_code(code: Optional[str]) -> str:
    """Trim and upper-case a user-entered coupon code"""
    return (code or "").strip().upper()


class CouponTable:
    """Read-only lookup of coupon rules by normalized code"""

    def __init__(self, rules: Optional[Iterable[CouponRule]] = None):
        source = COUPONS.values() if rules is None else rules
        table: dict[str, CouponRule] = {}
        for rule in source:
            code = normalize_code(rule.code)
            if not code:
                raise CouponConfigurationError("Coupon rule with an empty code")
            if code in table:
                raise CouponConfigurationError(f"Duplicate coupon code: {code}")
            table[code] = rule.model_copy(update={"code": code})
        self._rules = table

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CouponTable":
        """
        Load rules from a JSON file holding a list of rule objects.

        Raises:
            CouponConfigurationError: if the file is unreadable or a rule is invalid
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CouponConfigurationError(f"Cannot read coupon rules from {path}: {e}") from e

        if not isinstance(raw, list):
            raise CouponConfigurationError(f"Coupon rules in {path} must be a JSON list")

        try:
            rules = [CouponRule.model_validate(entry) for entry in raw]
        except ValidationError as e:
            raise CouponConfigurationError(f"Invalid coupon rule in {path}: {e}") from e

        logger.info(f"Loaded {len(rules)} coupon rules from {path}")
        return cls(rules)

    def get(self, code: Optional[str]) -> Optional[CouponRule]:
        """Exact match on the normalized code"""
        return self._rules.get(normalize_code(code))

    def all(self) -> list[CouponRule]:
        """Get all coupon rules"""
        return list(self._rules.values())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._rules

    def __len__(self) -> int:
        return len(self._rules)


# Default table built from COUPONS
coupon_table = CouponTable()
