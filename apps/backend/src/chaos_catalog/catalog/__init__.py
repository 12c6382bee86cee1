"""Read-only product catalog and checkout order ids."""

from .orders import OrderIdDeriver, canonical_encoding, derive_order_id
from .schema import Product
from .seed import SEED_PRODUCTS
from .store import ProductCatalog, ProductNotFound

__all__ = [
    "OrderIdDeriver",
    "Product",
    "ProductCatalog",
    "ProductNotFound",
    "SEED_PRODUCTS",
    "canonical_encoding",
    "derive_order_id",
]
