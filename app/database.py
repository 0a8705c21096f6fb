from typing import List, Optional

from .models import Category, Product

# The catalog is fixed and lives for the process lifetime.

PRODUCTS: List[Product] = [
    Product(
        id=1,
        name="Laptop",
        price=1200.5,
        stock=25,
        category=Category(id=101, name="Electronics"),
    ),
    Product(
        id=2,
        name="Headphones",
        price=50.0,
        stock=100,
        category=Category(id=102, name="Accessories"),
    ),
]


def get_product(product_id: int) -> Optional[Product]:
    for p in PRODUCTS:
        if p.id == product_id:
            return p
    return None
