"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from quotedesk.domain.model.order import Order
from quotedesk.domain.model.product import PriceTier, Product
from quotedesk.domain.model.quote import Quote
from quotedesk.domain.repository.order_repository import OrderRepository
from quotedesk.domain.repository.product_repository import ProductRepository
from quotedesk.domain.repository.quote_repository import QuoteRepository


def license_product(product_id: str = "1") -> Product:
    """The tiered sample product: 1200 up to 10, 1100 up to 100, 1000 up to 10,000."""
    return Product(
        id=product_id,
        name="Standard Software License",
        category="Software",
        description="A standard license for our flagship software.",
        price_tiers=[
            PriceTier.of(10, "1200.00"),
            PriceTier.of(100, "1100.00"),
            PriceTier.of(10_000, "1000.00"),
        ],
    )


def flat_product(product_id: str, name: str, price: str) -> Product:
    return Product(
        id=product_id,
        name=name,
        category="Service",
        description="",
        price_tiers=[PriceTier.of(10_000, price)],
    )


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.strip().lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def delete(self, product_id: str) -> bool:
        return self._store.pop(product_id, None) is not None


class FakeQuoteRepository(QuoteRepository):

    def __init__(self) -> None:
        self._store: dict[int, Quote] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, quote_id: int) -> Quote | None:
        return self._store.get(quote_id)

    def list_all(self) -> list[Quote]:
        return list(self._store.values())

    def save(self, quote: Quote) -> None:
        if quote.id is None:
            quote.id = self._next_id
            self._next_id += 1
        self._store[quote.id] = quote


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = order
