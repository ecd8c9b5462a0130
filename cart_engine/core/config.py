"""Cart Engine Configuration"""

import logging
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_prefix="CART_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront Cart"
    log_level: str = "INFO"
    currency_symbol: str = "৳"

    # Pricing
    free_shipping_threshold: int = Field(default=2000, ge=0)
    base_shipping_fee: int = Field(default=80, ge=0)

    # Persistence
    storage_key: str = "cart-storage"
    storage_dir: Optional[str] = None  # None keeps the cart in memory only
    persist_in_background: bool = True

    # Coupons
    coupon_rules_path: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
