"""Integration tests for creating and editing quotes.

Uses in-memory fake repositories — no file I/O.
"""

import logging

import pytest

from quotedesk.application.change_quote_status import ChangeQuoteStatusHandler
from quotedesk.application.create_quote import CreateQuoteHandler
from quotedesk.application.dto import QuoteItemSpec
from quotedesk.application.edit_quote_item import (
    AddQuoteItemHandler,
    ChangeQuantityHandler,
    RemoveQuoteItemHandler,
    SelectProductHandler,
    SetPriceHandler,
)
from quotedesk.application.show_quote import ListQuotesHandler, ShowQuoteHandler
from quotedesk.domain.exceptions import EntityNotFoundError, ValidationError
from quotedesk.domain.model.product import Product
from quotedesk.domain.model.value_objects import Money
from tests.fakes import (
    FakeProductRepository,
    FakeQuoteRepository,
    flat_product,
    license_product,
)


def _setup() -> tuple[FakeQuoteRepository, FakeProductRepository]:
    products = FakeProductRepository([
        license_product("1"),
        flat_product("2", "Premium Support Package", "500.00"),
        flat_product("3", "Training Workshop", "750.00"),
    ])
    return FakeQuoteRepository(), products


def _create(quote_repo, product_repo, *specs: QuoteItemSpec):
    return CreateQuoteHandler(quote_repo, product_repo).handle("Acme Corp", list(specs))


class TestCreateQuote:

    def test_totals(self):
        quote_repo, product_repo = _setup()
        dto = _create(
            quote_repo, product_repo,
            QuoteItemSpec("Premium Support Package", 2),
            QuoteItemSpec("Training Workshop", 1),
        )
        assert (dto.subtotal, dto.tax, dto.total) == ("$1,750.00", "$140.00", "$1,890.00")
        assert dto.tax_rate == "8%"
        assert dto.status == "draft"
        assert dto.id == 1

    def test_prices_resolved_from_tiers(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 50))
        assert dto.items[0].unit_price == "$1,100.00"
        assert dto.items[0].manual_price is False

    def test_over_threshold_needs_price(self):
        quote_repo, product_repo = _setup()
        with pytest.raises(ValidationError, match="needs a manual price"):
            _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 15_000))

    def test_over_threshold_with_price(self):
        quote_repo, product_repo = _setup()
        dto = _create(
            quote_repo, product_repo,
            QuoteItemSpec("Standard Software License", 15_000, price="850"),
        )
        assert dto.items[0].manual_price is True
        assert dto.items[0].line_total == "$12,750,000.00"

    def test_unknown_product(self):
        quote_repo, product_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            _create(quote_repo, product_repo, QuoteItemSpec("Nope", 1))

    def test_catalog_change_does_not_reprice_existing_quote(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        product_repo.save(flat_product("3", "Training Workshop", "9999"))
        assert ShowQuoteHandler(quote_repo).handle(dto.id).subtotal == "$750.00"


class TestChangeQuantity:

    def test_over_threshold_then_back_down(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 5_000))
        handler = ChangeQuantityHandler(quote_repo, product_repo)

        dto = handler.handle(dto.id, 1, 15_000)
        assert dto.items[0].manual_price is True
        assert dto.items[0].unit_price == "$1,000.00"

        SetPriceHandler(quote_repo, product_repo).handle(dto.id, 1, "800")
        dto = handler.handle(dto.id, 1, 500)
        assert dto.items[0].manual_price is False
        assert dto.items[0].unit_price == "$1,000.00"

    def test_totals_recomputed(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 5))
        dto = ChangeQuantityHandler(quote_repo, product_repo).handle(dto.id, 1, 20)
        assert dto.subtotal == "$22,000.00"
        assert dto.total == "$23,760.00"

    def test_deleted_product_keeps_price(self, caplog):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 5))
        product_repo.delete("1")
        with caplog.at_level(logging.WARNING, logger="quotedesk"):
            dto = ChangeQuantityHandler(quote_repo, product_repo).handle(dto.id, 1, 50)
        assert "no longer in the catalog" in caplog.text
        assert dto.items[0].unit_price == "$1,200.00"
        assert dto.items[0].quantity == 50

    def test_zero_quantity_rejected(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        with pytest.raises(ValidationError, match="must be positive"):
            ChangeQuantityHandler(quote_repo, product_repo).handle(dto.id, 1, 0)

    def test_unknown_quote(self):
        quote_repo, product_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Quote #9"):
            ChangeQuantityHandler(quote_repo, product_repo).handle(9, 1, 5)


class TestOtherItemEdits:

    def test_set_price(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 2, "750"))
        dto = SetPriceHandler(quote_repo, product_repo).handle(dto.id, 1, "700")
        assert dto.subtotal == "$1,400.00"
        assert dto.items[0].manual_price is True

    def test_set_price_on_tier_priced_line_rejected(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 5))
        with pytest.raises(ValidationError, match="priced from its product's tiers"):
            SetPriceHandler(quote_repo, product_repo).handle(dto.id, 1, "999")
        dto = SelectProductHandler(quote_repo, product_repo).handle(
            dto.id, 1, "Standard Software License"
        )
        assert dto.items[0].unit_price == "$1,200.00"

    def test_select_product(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 2))
        dto = SelectProductHandler(quote_repo, product_repo).handle(
            dto.id, 1, "Standard Software License"
        )
        assert dto.items[0].description == "Standard Software License"
        assert dto.items[0].unit_price == "$1,200.00"

    def test_add_and_remove_item(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        dto = AddQuoteItemHandler(quote_repo, product_repo).handle(
            dto.id, QuoteItemSpec("Premium Support Package", 2)
        )
        assert dto.subtotal == "$1,750.00"
        dto = RemoveQuoteItemHandler(quote_repo, product_repo).handle(dto.id, 1)
        assert [i.description for i in dto.items] == ["Premium Support Package"]
        assert dto.items[0].line == 1

    def test_edits_rejected_once_sent(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        ChangeQuoteStatusHandler(quote_repo).handle(dto.id, "sent")
        with pytest.raises(ValidationError, match="only draft quotes"):
            SetPriceHandler(quote_repo, product_repo).handle(dto.id, 1, "1")


class TestUntieredProductWarnings:

    def _with_bare_product(self):
        quote_repo, product_repo = _setup()
        product_repo.save(
            Product(id="4", name="Bare", category="", description="", price_tiers=[])
        )
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 2))
        return quote_repo, product_repo, dto.id

    def test_select_product_warns(self, caplog):
        quote_repo, product_repo, quote_id = self._with_bare_product()
        with caplog.at_level(logging.WARNING, logger="quotedesk"):
            dto = SelectProductHandler(quote_repo, product_repo).handle(quote_id, 1, "Bare")
        assert dto.items[0].unit_price == "$0.00"
        assert "no price tiers" in caplog.text

    def test_change_quantity_warns(self, caplog):
        quote_repo, product_repo, quote_id = self._with_bare_product()
        SelectProductHandler(quote_repo, product_repo).handle(quote_id, 1, "Bare")
        caplog.clear()
        with caplog.at_level(logging.WARNING, logger="quotedesk"):
            dto = ChangeQuantityHandler(quote_repo, product_repo).handle(quote_id, 1, 7)
        assert dto.items[0].unit_price == "$0.00"
        assert "no price tiers" in caplog.text

    def test_manual_line_does_not_warn(self, caplog):
        quote_repo, product_repo, quote_id = self._with_bare_product()
        ChangeQuantityHandler(quote_repo, product_repo).handle(quote_id, 1, 12_000)
        caplog.clear()
        with caplog.at_level(logging.WARNING, logger="quotedesk"):
            SelectProductHandler(quote_repo, product_repo).handle(quote_id, 1, "Bare")
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_locked_quote_logs_nothing(self, caplog):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Standard Software License", 5))
        product_repo.delete("1")
        ChangeQuoteStatusHandler(quote_repo).handle(dto.id, "sent")
        with caplog.at_level(logging.WARNING, logger="quotedesk"):
            with pytest.raises(ValidationError, match="only draft quotes"):
                ChangeQuantityHandler(quote_repo, product_repo).handle(dto.id, 1, 50)
        assert "no longer in the catalog" not in caplog.text


class TestQuoteStatusAndListing:

    def test_status_change(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        dto = ChangeQuoteStatusHandler(quote_repo).handle(dto.id, "SENT")
        assert dto.status == "sent"

    def test_unknown_status(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        with pytest.raises(ValidationError, match="Unknown quote status"):
            ChangeQuoteStatusHandler(quote_repo).handle(dto.id, "won")

    def test_list_filters_by_status(self):
        quote_repo, product_repo = _setup()
        first = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 2))
        ChangeQuoteStatusHandler(quote_repo).handle(first.id, "sent")

        assert [q.id for q in ListQuotesHandler(quote_repo).handle()] == [1, 2]
        assert [q.id for q in ListQuotesHandler(quote_repo).handle("sent")] == [1]

    def test_show_unknown(self):
        with pytest.raises(EntityNotFoundError):
            ShowQuoteHandler(FakeQuoteRepository()).handle(1)

    def test_totals_never_stored_on_quote(self):
        quote_repo, product_repo = _setup()
        dto = _create(quote_repo, product_repo, QuoteItemSpec("Training Workshop", 1))
        quote = quote_repo.get_by_id(dto.id)
        quote.items[0].unit_price = Money.of("1000")
        assert ShowQuoteHandler(quote_repo).handle(dto.id).total == "$1,080.00"
