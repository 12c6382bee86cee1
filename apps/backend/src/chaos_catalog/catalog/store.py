"""Read-only in-memory product catalog."""

from collections.abc import Iterable
from types import MappingProxyType

from .schema import Product
from .seed import SEED_PRODUCTS


class ProductNotFound(LookupError):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"no such product: {product_id}")


class ProductCatalog:
    """Holds an immutable set of products keyed by id.

    Populated once at construction and never mutated afterwards, so reads
    need no locking. Insertion order is the stable order for listings.
    """

    def __init__(self, products: Iterable[Product] = SEED_PRODUCTS):
        by_id: dict[str, Product] = {}
        for product in products:
            if product.id in by_id:
                raise ValueError(f"Duplicate product id '{product.id}'")
            by_id[product.id] = product
        self._products = MappingProxyType(by_id)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def find_by_id(self, product_id: str) -> Product | None:
        """Exact-key lookup. Returns None when the id is unknown."""
        return self._products.get(product_id)

    def get(self, product_id: str) -> Product:
        """Exact-key lookup that raises ProductNotFound for unknown ids."""
        product = self.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def search(self, query: str | None = None) -> list[Product]:
        """Case-insensitive substring search over id, name and category.

        An empty, blank or missing query returns every product.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return list(self._products.values())
        return [p for p in self._products.values() if p.matches(needle)]

    def price_sum(self, product_ids: Iterable[str] | None) -> int:
        """Sum of prices for the given ids. Unknown ids are skipped."""
        if not product_ids:
            return 0
        total = 0
        for product_id in product_ids:
            product = self._products.get(product_id)
            if product is not None:
                total += product.price_cents
        return total
