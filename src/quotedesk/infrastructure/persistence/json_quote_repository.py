"""JSON-file-backed implementation of QuoteRepository.

Only line items are stored; subtotal, tax and total are recomputed from
them whenever a quote is read.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from quotedesk.domain.model.quote import Quote, QuoteLineItem, QuoteStatus
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.repository.quote_repository import QuoteRepository
from quotedesk.infrastructure.persistence.json_file import JsonFileStore


class JsonQuoteRepository(JsonFileStore, QuoteRepository):

    # --- QuoteRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_numeric_id()

    def get_by_id(self, quote_id: int) -> Quote | None:
        for raw in self._load_raw():
            if raw["id"] == quote_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Quote]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, quote: Quote) -> None:
        if quote.id is None:
            quote.id = self.next_id()
        self._upsert(self._to_raw(quote))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(quote: Quote) -> dict:
        return {
            "id": quote.id,
            "customer": quote.customer,
            "description": quote.description,
            "status": quote.status.value,
            "valid_until": quote.valid_until.isoformat(),
            "expected_delivery_date": quote.expected_delivery_date.isoformat(),
            "created_at": quote.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "description": item.description,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "manual_price": item.manual_price,
                }
                for item in quote.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Quote:
        items = [
            QuoteLineItem(
                product_id=i.get("product_id"),
                description=i["description"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                manual_price=i.get("manual_price", False),
            )
            for i in raw["items"]
        ]
        return Quote(
            id=raw["id"],
            customer=raw["customer"],
            items=items,
            description=raw.get("description", ""),
            status=QuoteStatus(raw["status"]),
            valid_until=date.fromisoformat(raw["valid_until"]),
            expected_delivery_date=date.fromisoformat(raw["expected_delivery_date"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
