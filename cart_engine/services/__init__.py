# Services

from . import pricing
from .cart_store import CartStore

__all__ = ["pricing", "CartStore"]
