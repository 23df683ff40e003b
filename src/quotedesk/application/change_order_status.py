"""Application service: advance an order along pending -> delivered, or cancel it."""

from __future__ import annotations

import logging

from quotedesk.application.dto import OrderDTO
from quotedesk.domain.exceptions import EntityNotFoundError, ValidationError
from quotedesk.domain.model.order import OrderStatus
from quotedesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


def parse_order_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError as exc:
        choices = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of: {choices})") from exc


class ChangeOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, new_status: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.advance_to(parse_order_status(new_status))
        self._order_repo.save(order)

        logger.info("Order #%s: %s -> %s", order.id, previous.value, order.status.value)
        return OrderDTO.from_domain(order)
