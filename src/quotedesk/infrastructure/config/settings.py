"""Centralized settings for quotedesk.

Values come from ``QUOTEDESK_*`` environment variables, falling back to
defaults.  The CLI may override individual values for one invocation
through ``override_settings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path

from quotedesk.domain.exceptions import ValidationError
from quotedesk.domain.model.pricing_policy import (
    MANUAL_PRICE_THRESHOLD,
    TAX_RATE,
    PricingPolicy,
)

ENV_PREFIX = "QUOTEDESK_"


def get_project_root() -> Path:
    """Repo root when installed in editable mode (``src/quotedesk/...``)."""
    return Path(__file__).resolve().parents[4]


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    tax_rate: Decimal = TAX_RATE
    manual_price_threshold: int = MANUAL_PRICE_THRESHOLD
    log_level: str = "WARNING"

    @classmethod
    def load(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from the environment (``os.environ`` by default)."""
        env = os.environ if environ is None else environ

        data_dir = env.get(f"{ENV_PREFIX}DATA_DIR")
        tax_rate = env.get(f"{ENV_PREFIX}TAX_RATE")
        threshold = env.get(f"{ENV_PREFIX}MANUAL_PRICE_THRESHOLD")

        return cls(
            data_dir=Path(data_dir) if data_dir else get_project_root() / "data",
            tax_rate=_parse_decimal("TAX_RATE", tax_rate) if tax_rate else TAX_RATE,
            manual_price_threshold=(
                _parse_int("MANUAL_PRICE_THRESHOLD", threshold)
                if threshold
                else MANUAL_PRICE_THRESHOLD
            ),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
        )

    def pricing_policy(self) -> PricingPolicy:
        return PricingPolicy(
            tax_rate=self.tax_rate,
            manual_price_threshold=self.manual_price_threshold,
        )


def _parse_decimal(name: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"{ENV_PREFIX}{name} must be a finite number, got {raw!r}")
    return value


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


# Default settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def override_settings(**changes) -> Settings:
    """Replace selected fields of the process-wide settings."""
    global _settings
    _settings = replace(get_settings(), **changes)
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
