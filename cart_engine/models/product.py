"""Catalog snapshot models consumed by the cart"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class ProductVariant(BaseModel):
    """Variant of a product (size, colour, ...) with its price adjustment"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    product_id: Optional[str] = None
    name: str = ""
    sku: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    price_adjustment: int = 0


class Product(BaseModel):
    """Product snapshot taken when it was added to the cart"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str = ""
    slug: Optional[str] = None
    sku: Optional[str] = None
    base_price: int = Field(ge=0)
    sale_price: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None

    @property
    def effective_price(self) -> int:
        """Sale price when one is set, otherwise the base price"""
        if self.sale_price is not None:
            return self.sale_price
        return self.base_price
