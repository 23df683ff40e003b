"""Application service: Show / List Orders (queries)."""

from __future__ import annotations

from quotedesk.application.change_order_status import parse_order_status
from quotedesk.application.dto import OrderDTO
from quotedesk.domain.exceptions import EntityNotFoundError
from quotedesk.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_domain(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        orders = self._order_repo.list_all()
        if status is not None:
            wanted = parse_order_status(status)
            orders = [o for o in orders if o.status == wanted]
        return [OrderDTO.from_domain(o) for o in orders]
