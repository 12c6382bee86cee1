"""Fixed seed data the catalog is populated with at startup."""

from .schema import Product

SEED_PRODUCTS: tuple[Product, ...] = (
    Product(id="p-100", name="NVMe SSD 1TB", category="storage", price_cents=6900),
    Product(id="p-101", name="NVMe SSD 2TB", category="storage", price_cents=11900),
    Product(id="p-102", name="DDR5 RAM 16GB", category="memory", price_cents=5200),
    Product(id="p-103", name="DDR5 RAM 32GB", category="memory", price_cents=9800),
    Product(id="p-104", name="USB-C Hub", category="accessories", price_cents=2900),
    Product(id="p-105", name="Mechanical Keyboard", category="peripherals", price_cents=7900),
    Product(id="p-106", name="1080p Webcam", category="peripherals", price_cents=3400),
    Product(id="p-107", name='27" 144Hz Monitor', category="display", price_cents=22900),
    Product(id="p-108", name="Wireless Mouse", category="peripherals", price_cents=1900),
    Product(id="p-109", name="External SSD 1TB", category="storage", price_cents=8900),
)
