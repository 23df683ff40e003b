"""Tests for environment-driven settings."""

from decimal import Decimal
from pathlib import Path

import pytest

from quotedesk.domain.exceptions import ValidationError
from quotedesk.infrastructure.config.settings import (
    Settings,
    get_settings,
    override_settings,
    reset_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


class TestSettingsLoad:

    def test_defaults(self):
        settings = Settings.load({})
        assert settings.data_dir.name == "data"
        assert settings.tax_rate == Decimal("0.08")
        assert settings.manual_price_threshold == 10_000
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, tmp_path):
        settings = Settings.load({
            "QUOTEDESK_DATA_DIR": str(tmp_path),
            "QUOTEDESK_TAX_RATE": "0.0725",
            "QUOTEDESK_MANUAL_PRICE_THRESHOLD": "5000",
            "QUOTEDESK_LOG_LEVEL": "debug",
        })
        assert settings.data_dir == Path(tmp_path)
        assert settings.tax_rate == Decimal("0.0725")
        assert settings.manual_price_threshold == 5000
        assert settings.log_level == "DEBUG"

    def test_pricing_policy_built_from_settings(self):
        policy = Settings.load({"QUOTEDESK_TAX_RATE": "0.1"}).pricing_policy()
        assert policy.tax_rate == Decimal("0.1")
        assert policy.manual_price_threshold == 10_000

    def test_invalid_tax_rate(self):
        with pytest.raises(ValidationError, match="QUOTEDESK_TAX_RATE"):
            Settings.load({"QUOTEDESK_TAX_RATE": "eight"})

    def test_invalid_threshold(self):
        with pytest.raises(ValidationError, match="QUOTEDESK_MANUAL_PRICE_THRESHOLD"):
            Settings.load({"QUOTEDESK_MANUAL_PRICE_THRESHOLD": "10k"})

    def test_negative_tax_rate_rejected_by_policy(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Settings.load({"QUOTEDESK_TAX_RATE": "-1"}).pricing_policy()


class TestSettingsCache:

    def test_loaded_once_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("QUOTEDESK_DATA_DIR", str(tmp_path))
        assert get_settings() is get_settings()
        assert get_settings().data_dir == tmp_path

    def test_override(self, tmp_path):
        override_settings(data_dir=tmp_path)
        assert get_settings().data_dir == tmp_path
