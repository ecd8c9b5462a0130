"""Cart engine exceptions"""


class CartEngineError(Exception):
    """Base exception for cart engine errors"""
    pass


class CouponConfigurationError(CartEngineError):
    """Coupon rules could not be loaded"""
    pass
