"""Kalshi prediction market client for public exchange data."""

from kalshi_tools.clients.kalshi.client import KalshiClient, iter_pages
from kalshi_tools.clients.kalshi.exceptions import (
    KalshiAPIError,
    KalshiAuthenticationError,
    KalshiDecodeError,
    KalshiError,
    KalshiNotFoundError,
    KalshiQueryEncodingError,
    KalshiRateLimitError,
    KalshiTransportError,
    KalshiValidationError,
)
from kalshi_tools.clients.kalshi.models import (
    Candle,
    DaySchedule,
    Event,
    ExchangeSchedule,
    ExchangeStatus,
    MaintenanceWindow,
    Market,
    MarketStatus,
    MultivariateEventCollection,
    Orderbook,
    OrderbookLevel,
    Page,
    SettlementResult,
    SettlementSource,
    Series,
    StandardHours,
    Trade,
)

__all__ = [
    "Candle",
    "DaySchedule",
    "Event",
    "ExchangeSchedule",
    "ExchangeStatus",
    "KalshiAPIError",
    "KalshiAuthenticationError",
    "KalshiClient",
    "KalshiDecodeError",
    "KalshiError",
    "KalshiNotFoundError",
    "KalshiQueryEncodingError",
    "KalshiRateLimitError",
    "KalshiTransportError",
    "KalshiValidationError",
    "MaintenanceWindow",
    "Market",
    "MarketStatus",
    "MultivariateEventCollection",
    "Orderbook",
    "OrderbookLevel",
    "Page",
    "SettlementResult",
    "SettlementSource",
    "Series",
    "StandardHours",
    "Trade",
    "iter_pages",
]
