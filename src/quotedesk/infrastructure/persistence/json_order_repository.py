"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from quotedesk.domain.model.order import Order, OrderLineItem, OrderStatus
from quotedesk.domain.model.value_objects import Money, Quantity
from quotedesk.domain.repository.order_repository import OrderRepository
from quotedesk.infrastructure.persistence.json_file import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_numeric_id()

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "quote_id": order.quote_id,
            "customer": order.customer,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "description": item.description,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i.get("product_id"),
                description=i["description"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            quote_id=raw["quote_id"],
            customer=raw["customer"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
