"""Shared test configuration and fixtures."""

import os
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import patch

import pytest

import kalshi_tools.core.config as config_module

_CREDENTIAL_ENV_VARS = ("KALSHI_API_KEY_ID", "KALSHI_PRIVATE_KEY_PATH", "KALSHI_BASE_URL")

MarketFactory = Callable[..., dict[str, Any]]


@pytest.fixture(autouse=True)
def _isolate_config() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Keep developer credentials and the config singleton out of tests.

    ``settings.yaml`` reads Kalshi credentials from the environment, so a
    developer shell with real keys would otherwise change what
    ``KalshiClient.from_config`` builds.
    """
    env = {k: v for k, v in os.environ.items() if k not in _CREDENTIAL_ENV_VARS}
    with (
        patch.dict(os.environ, env, clear=True),
        patch("kalshi_tools.core.config.load_dotenv"),
    ):
        config_module._config = None
        yield
        config_module._config = None


def _market(**overrides: Any) -> dict[str, Any]:
    """Build a complete market object as the trade API sends it."""
    market: dict[str, Any] = {
        "ticker": "KXBTCD-25JAN01-T100000",
        "event_ticker": "KXBTCD-25JAN01",
        "market_type": "binary",
        "title": "Bitcoin above $100,000 on Jan 1?",
        "subtitle": "$100,000 or above",
        "yes_sub_title": "Above $100,000",
        "no_sub_title": "Below $100,000",
        "open_time": "2024-12-31T17:00:00Z",
        "close_time": "2025-01-01T17:00:00Z",
        "expected_expiration_time": "2025-01-01T17:05:00Z",
        "expiration_time": None,
        "latest_expiration_time": "2025-01-08T17:00:00Z",
        "settlement_timer_seconds": 60,
        "status": "active",
        "response_price_units": "usd_cent",
        "notional_value": 100,
        "tick_size": 1,
        "yes_bid": 42,
        "yes_ask": 44,
        "no_bid": 56,
        "no_ask": 58,
        "last_price": 43,
        "previous_yes_bid": 40,
        "previous_yes_ask": 45,
        "previous_price": 41,
        "volume": 15230,
        "volume_24h": 4100,
        "liquidity": 250000,
        "open_interest": 9800,
        "result": "",
        "cap_strike": None,
        "can_close_early": True,
        "expiration_value": "",
        "category": "Crypto",
        "risk_limit_cents": 0,
        "strike_type": "greater",
        "floor_strike": 100000,
        "rules_primary": "Resolves YES if the BRTI is above $100,000.",
        "rules_secondary": "",
        "settlement_value": None,
        "functional_strike": None,
    }
    market.update(overrides)
    return market


@pytest.fixture
def market_payload() -> MarketFactory:
    """Return a factory for complete market objects with overrides."""
    return _market


@pytest.fixture
def event_payload() -> Callable[..., dict[str, Any]]:
    """Return a factory for event objects with overrides."""

    def _event(**overrides: Any) -> dict[str, Any]:
        event: dict[str, Any] = {
            "event_ticker": "KXBTCD-25JAN01",
            "series_ticker": "KXBTCD",
            "title": "Bitcoin price on Jan 1, 2025?",
            "sub_title": "On Jan 1, 2025",
            "mutually_exclusive": False,
            "category": "Crypto",
            "strike_date": "2025-01-01T17:00:00Z",
            "strike_period": None,
        }
        event.update(overrides)
        return event

    return _event
