# Core modules

from .config import settings, get_settings, Settings
from .exceptions import CartEngineError, CouponConfigurationError
from .logging import configure_logging

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "CartEngineError",
    "CouponConfigurationError",
    "configure_logging",
]
