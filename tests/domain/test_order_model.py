"""Unit tests for the Order aggregate and its status pipeline."""

import pytest

from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.order import Order, OrderStatus
from quotedesk.domain.model.quote import Quote, QuoteLineItem, QuoteStatus
from quotedesk.domain.model.value_objects import Money, Quantity
from tests.fakes import flat_product


def _sent_quote() -> Quote:
    items = [
        QuoteLineItem.for_product(flat_product("2", "Support", "500"), Quantity(2)),
        QuoteLineItem.for_product(flat_product("3", "Training", "750"), Quantity(1)),
    ]
    quote = Quote.create("Acme Corp", items)
    quote.id = 7
    quote.transition_to(QuoteStatus.SENT)
    return quote


class TestOrderFromQuote:

    def test_snapshot_of_items_and_grand_total(self):
        order = Order.from_quote(_sent_quote())
        assert order.id is None
        assert order.quote_id == 7
        assert order.customer == "Acme Corp"
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Money.of("1890")
        assert [(i.description, i.quantity.value) for i in order.items] == [
            ("Support", 2), ("Training", 1),
        ]
        assert order.items[0].line_total == Money.of("1000")

    def test_later_quote_edits_do_not_leak(self):
        quote = _sent_quote()
        order = Order.from_quote(quote)
        quote.items[0].unit_price = Money.of("1")
        assert order.items[0].unit_price == Money.of("500")

    def test_unsaved_quote_rejected(self):
        quote = _sent_quote()
        quote.id = None
        with pytest.raises(ValidationError, match="must be saved"):
            Order.from_quote(quote)


class TestOrderStatus:

    def _order(self) -> Order:
        return Order.from_quote(_sent_quote())

    def test_full_pipeline(self):
        order = self._order()
        for status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            order.advance_to(status)
        assert order.status == OrderStatus.DELIVERED
        assert not order.is_open

    def test_cannot_skip_a_step(self):
        order = self._order()
        with pytest.raises(ValidationError, match="from pending to shipped"):
            order.advance_to(OrderStatus.SHIPPED)

    def test_cancel_from_shipped(self):
        order = self._order()
        order.advance_to(OrderStatus.PROCESSING)
        order.advance_to(OrderStatus.SHIPPED)
        order.cancel()
        assert order.status == OrderStatus.CANCELLED

    def test_delivered_order_cannot_be_cancelled(self):
        order = self._order()
        for status in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            order.advance_to(status)
        with pytest.raises(ValidationError, match="can no longer change status"):
            order.cancel()

    def test_cancelled_order_is_final(self):
        order = self._order()
        order.cancel()
        with pytest.raises(ValidationError, match="can no longer change status"):
            order.advance_to(OrderStatus.PROCESSING)
