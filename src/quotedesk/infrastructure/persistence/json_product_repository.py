"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from quotedesk.domain.model.product import PriceTier, Product
from quotedesk.domain.model.value_objects import Money
from quotedesk.domain.repository.product_repository import ProductRepository
from quotedesk.infrastructure.persistence.json_file import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        for raw in self._load_raw():
            if raw["name"].lower() == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, product: Product) -> None:
        self._upsert(self._to_raw(product))

    def delete(self, product_id: str) -> bool:
        records = self._load_raw()
        kept = [raw for raw in records if raw["id"] != product_id]
        if len(kept) == len(records):
            return False
        self._persist_raw(kept)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "description": product.description,
            "price_tiers": [
                {
                    "up_to_quantity": tier.up_to_quantity,
                    "price": str(tier.price.amount),
                    "currency": tier.price.currency,
                }
                for tier in product.price_tiers
            ],
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        # Tiers are kept in stored order; the resolver sorts them itself.
        tiers = [
            PriceTier(
                up_to_quantity=t["up_to_quantity"],
                price=Money(Decimal(t["price"]), t.get("currency", "USD")),
            )
            for t in raw.get("price_tiers", [])
        ]
        return Product(
            id=raw["id"],
            name=raw["name"],
            category=raw.get("category", ""),
            description=raw.get("description", ""),
            price_tiers=tiers,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
