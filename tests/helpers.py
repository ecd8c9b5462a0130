# tests/helpers.py
from cart_engine.models import Product, ProductVariant

FREE_SHIPPING_THRESHOLD = 2000
BASE_SHIPPING_FEE = 80


def make_product(product_id: str = "prod-1", base_price: int = 1000, sale_price=None) -> Product:
    return Product(
        id=product_id,
        name=f"Product {product_id}",
        sku=f"SKU-{product_id}",
        base_price=base_price,
        sale_price=sale_price,
    )


def make_variant(variant_id: str = "var-1", product_id: str = "prod-1", adjustment: int = 0) -> ProductVariant:
    return ProductVariant(
        id=variant_id,
        product_id=product_id,
        name=f"Variant {variant_id}",
        price_adjustment=adjustment,
    )
