"""Typed data models for Kalshi exchange data.

Provide frozen dataclasses that insulate callers from the loosely typed
JSON returned by the trade API.  Prices are integer cents as sent on the
wire; fractional strike values use ``Decimal``.  Every sequence is a tuple
so a decoded value can be shared freely between tasks.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, NamedTuple, TypeVar

T = TypeVar("T")


class SettlementResult(Enum):
    """Outcome a market settled to.

    The wire tokens are irregular: a voided market is the empty string and
    the two multi-outcome settlements are snake case.
    """

    YES = "yes"
    NO = "no"
    VOID = ""
    ALL_NO = "all_no"
    ALL_YES = "all_yes"

    @classmethod
    def from_wire(cls, token: str) -> "SettlementResult":
        """Look up the variant for a wire token.

        Raises:
            ValueError: If the token is not in the settlement table.

        """
        try:
            return _SETTLEMENT_BY_TOKEN[token]
        except KeyError:
            msg = f"Unknown settlement result token: {token!r}"
            raise ValueError(msg) from None

    def to_wire(self) -> str:
        """Return the token the API uses for this variant."""
        return _TOKEN_BY_SETTLEMENT[self]


_TOKEN_BY_SETTLEMENT: dict[SettlementResult, str] = {
    SettlementResult.YES: "yes",
    SettlementResult.NO: "no",
    SettlementResult.VOID: "",
    SettlementResult.ALL_NO: "all_no",
    SettlementResult.ALL_YES: "all_yes",
}
_SETTLEMENT_BY_TOKEN: dict[str, SettlementResult] = {
    token: result for result, token in _TOKEN_BY_SETTLEMENT.items()
}


class MarketStatus(Enum):
    """Lifecycle state accepted by the ``status`` list filters."""

    OPEN = "open"
    CLOSED = "closed"
    SETTLED = "settled"


class Page(NamedTuple, Generic[T]):
    """One page of a cursor-paginated list endpoint.

    Unpacks as ``cursor, items``.  ``cursor`` is ``None`` when the server
    did not send one; pass it back unchanged to fetch the next page.
    """

    cursor: str | None
    items: list[T]


@dataclass(frozen=True)
class ExchangeStatus:
    """Point-in-time availability of the exchange."""

    trading_active: bool
    exchange_active: bool


@dataclass(frozen=True)
class DaySchedule:
    """Opening and closing time of one trading session."""

    open_time: str
    close_time: str


@dataclass(frozen=True)
class StandardHours:
    """Weekly trading sessions valid between ``start_time`` and ``end_time``.

    A day with no trading holds an empty tuple, never ``None``.
    """

    start_time: str
    end_time: str
    monday: tuple[DaySchedule, ...] = ()
    tuesday: tuple[DaySchedule, ...] = ()
    wednesday: tuple[DaySchedule, ...] = ()
    thursday: tuple[DaySchedule, ...] = ()
    friday: tuple[DaySchedule, ...] = ()
    saturday: tuple[DaySchedule, ...] = ()
    sunday: tuple[DaySchedule, ...] = ()


@dataclass(frozen=True)
class MaintenanceWindow:
    """Scheduled downtime window."""

    start_datetime: str
    end_datetime: str


@dataclass(frozen=True)
class ExchangeSchedule:
    """Standard trading hours plus announced maintenance windows."""

    standard_hours: tuple[StandardHours, ...] = ()
    maintenance_windows: tuple[MaintenanceWindow, ...] = ()


@dataclass(frozen=True)
class Market:
    """One binary-outcome instrument listed under an event.

    Args:
        ticker: Unique market ticker.
        event_ticker: Ticker of the parent event.
        yes_bid: Best YES bid in cents.
        yes_ask: Best YES ask in cents.
        last_price: Last traded YES price in cents.
        result: Settlement outcome; ``SettlementResult.VOID`` until settled.

    """

    ticker: str
    event_ticker: str
    market_type: str
    title: str
    subtitle: str
    yes_sub_title: str
    no_sub_title: str
    open_time: str
    close_time: str
    latest_expiration_time: str
    settlement_timer_seconds: int
    status: str
    response_price_units: str
    notional_value: int
    tick_size: int
    yes_bid: int
    yes_ask: int
    no_bid: int
    no_ask: int
    last_price: int
    previous_yes_bid: int
    previous_yes_ask: int
    previous_price: int
    volume: int
    volume_24h: int
    liquidity: int
    open_interest: int
    result: SettlementResult
    can_close_early: bool
    expiration_value: str
    category: str
    risk_limit_cents: int
    rules_primary: str
    rules_secondary: str
    expected_expiration_time: str | None = None
    expiration_time: str | None = None
    cap_strike: Decimal | None = None
    floor_strike: Decimal | None = None
    strike_type: str | None = None
    settlement_value: str | None = None
    functional_strike: str | None = None


@dataclass(frozen=True)
class Event:
    """A prediction-market topic grouping one or more markets.

    ``markets`` is only populated when the list was requested with
    ``with_nested_markets``; otherwise it is ``None``.
    """

    event_ticker: str
    series_ticker: str
    title: str
    sub_title: str
    mutually_exclusive: bool
    category: str
    strike_date: str | None = None
    strike_period: str | None = None
    markets: tuple[Market, ...] | None = None


@dataclass(frozen=True)
class SettlementSource:
    """Data source used to settle the markets of a series."""

    url: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Series:
    """A themed group of recurring events.

    Every scalar field is optional because the API omits them freely.
    Keys the model does not know about are kept verbatim in ``extra``,
    in the order the server sent them.
    """

    ticker: str | None = None
    frequency: str | None = None
    title: str | None = None
    category: str | None = None
    contract_url: str | None = None
    tags: tuple[str, ...] = ()
    settlement_sources: tuple[SettlementSource, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MultivariateEventCollection:
    """A named group of related markets analysed jointly."""

    collection_ticker: str
    title: str
    description: str
    category: str
    created_time: str
    updated_time: str
    tags: tuple[str, ...] = ()
    markets: tuple[Market, ...] = ()


@dataclass(frozen=True)
class Trade:
    """One executed transaction on a market."""

    trade_id: str
    ticker: str
    taker_side: str
    count: int
    yes_price: int
    no_price: int
    created_time: str


@dataclass(frozen=True)
class Candle:
    """OHLC bucket for one market covering ``start_ts`` to ``end_ts``."""

    start_ts: int
    end_ts: int
    yes_open: int
    yes_high: int
    yes_low: int
    yes_close: int
    no_open: int
    no_high: int
    no_low: int
    no_close: int
    volume: int
    open_interest: int


@dataclass(frozen=True)
class OrderbookLevel:
    """Resting size at one price on one side of the book."""

    price: int
    size: int


@dataclass(frozen=True)
class Orderbook:
    """Resting orders for a market.

    A side the server did not send is ``None``; an empty side that was sent
    is an empty tuple.
    """

    yes: tuple[OrderbookLevel, ...] | None = None
    no: tuple[OrderbookLevel, ...] | None = None
