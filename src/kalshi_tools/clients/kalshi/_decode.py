"""Tolerant field normalisation from raw JSON objects to typed models.

The trade API is loose about a handful of things: list fields arrive as
``null`` as often as ``[]``, series objects grow new keys without notice,
and the settlement result uses an empty string for "void".  All of that is
absorbed here, in one place, through ``FieldReader``.  Anything else that
does not match the model (missing required keys, wrong JSON types, unknown
enum tokens) raises ``KalshiDecodeError`` with the JSON path of the field.
"""

from collections.abc import Callable, Collection
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar, cast

from kalshi_tools.clients.kalshi.exceptions import KalshiDecodeError
from kalshi_tools.clients.kalshi.models import (
    Candle,
    DaySchedule,
    Event,
    ExchangeSchedule,
    ExchangeStatus,
    MaintenanceWindow,
    Market,
    MultivariateEventCollection,
    Orderbook,
    OrderbookLevel,
    SettlementResult,
    SettlementSource,
    Series,
    StandardHours,
    Trade,
)

T = TypeVar("T")

_MISSING = object()
_LEVEL_WIDTH = 2


def _json_type(value: Any) -> str:
    """Name the JSON type of a decoded value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _check_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise KalshiDecodeError(f"expected integer, found {_json_type(value)}", path, value)
    if isinstance(value, float):
        if not value.is_integer():
            raise KalshiDecodeError("expected integer, found fraction", path, value)
        return int(value)
    return value


class FieldReader:
    """Typed accessors over one JSON object, tracking its path.

    Args:
        raw: Decoded JSON value expected to be an object.
        path: JSON path of ``raw`` inside the response.

    Raises:
        KalshiDecodeError: If ``raw`` is not a JSON object.

    """

    def __init__(self, raw: Any, path: str = "$") -> None:
        """Wrap ``raw`` after checking it is a JSON object."""
        if not isinstance(raw, dict):
            raise KalshiDecodeError(f"expected object, found {_json_type(raw)}", path)
        self.raw = cast("dict[str, Any]", raw)
        self.path = path

    def child(self, key: str) -> str:
        """Return the JSON path of ``key`` under this object."""
        return f"{self.path}.{key}"

    def _get(self, key: str, *, required: bool) -> Any:
        value = self.raw.get(key, _MISSING)
        if value is _MISSING or value is None:
            if required:
                raise KalshiDecodeError("missing required field", self.child(key))
            return None
        return value

    def string(self, key: str) -> str:
        """Return a required string field."""
        value = self._get(key, required=True)
        if not isinstance(value, str):
            raise KalshiDecodeError(
                f"expected string, found {_json_type(value)}", self.child(key), value
            )
        return value

    def optional_string(self, key: str) -> str | None:
        """Return a string field, ``None`` when absent or null."""
        if self._get(key, required=False) is None:
            return None
        return self.string(key)

    def integer(self, key: str) -> int:
        """Return a required integer field."""
        return _check_int(self._get(key, required=True), self.child(key))

    def boolean(self, key: str) -> bool:
        """Return a required boolean field."""
        value = self._get(key, required=True)
        if not isinstance(value, bool):
            raise KalshiDecodeError(
                f"expected boolean, found {_json_type(value)}", self.child(key), value
            )
        return value

    def optional_decimal(self, key: str) -> Decimal | None:
        """Return a numeric field as ``Decimal``, ``None`` when absent or null.

        Go through ``str()`` so binary floats keep their printed value.
        """
        value = self._get(key, required=False)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise KalshiDecodeError(
                f"expected number, found {_json_type(value)}", self.child(key), value
            )
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise KalshiDecodeError("expected number", self.child(key), value) from exc

    def array(self, key: str) -> list[Any] | None:
        """Return a raw array field, ``None`` when absent or null."""
        value = self._get(key, required=False)
        if value is None:
            return None
        if not isinstance(value, list):
            raise KalshiDecodeError(
                f"expected array, found {_json_type(value)}", self.child(key), value
            )
        return cast("list[Any]", value)

    def items(self, key: str, parser: Callable[["FieldReader"], T]) -> tuple[T, ...]:
        """Parse an array of objects; null or absent becomes ``()``."""
        return self.optional_items(key, parser) or ()

    def optional_items(
        self, key: str, parser: Callable[["FieldReader"], T]
    ) -> tuple[T, ...] | None:
        """Parse an array of objects, keeping null or absent as ``None``."""
        values = self.array(key)
        if values is None:
            return None
        base = self.child(key)
        return tuple(parser(FieldReader(item, f"{base}[{i}]")) for i, item in enumerate(values))

    def strings(self, key: str) -> tuple[str, ...]:
        """Parse an array of strings; null or absent becomes ``()``."""
        values = self.array(key) or []
        base = self.child(key)
        for i, item in enumerate(values):
            if not isinstance(item, str):
                raise KalshiDecodeError(
                    f"expected string, found {_json_type(item)}", f"{base}[{i}]", item
                )
        return tuple(values)

    def settlement_result(self, key: str) -> SettlementResult:
        """Map a settlement token through the closed result table.

        ``""`` is a real token (void), so only an absent key or ``null``
        counts as missing.
        """
        token = self.string(key)
        try:
            return SettlementResult.from_wire(token)
        except ValueError:
            raise KalshiDecodeError(
                "unknown settlement result", self.child(key), token
            ) from None

    def extras(self, known: Collection[str]) -> dict[str, Any]:
        """Return every key not in ``known``, verbatim and in wire order."""
        return {k: v for k, v in self.raw.items() if k not in known}


def parse_exchange_status(r: FieldReader) -> ExchangeStatus:
    """Convert an exchange status object into ``ExchangeStatus``."""
    return ExchangeStatus(
        trading_active=r.boolean("trading_active"),
        exchange_active=r.boolean("exchange_active"),
    )


def _parse_day_schedule(r: FieldReader) -> DaySchedule:
    return DaySchedule(open_time=r.string("open_time"), close_time=r.string("close_time"))


def _parse_standard_hours(r: FieldReader) -> StandardHours:
    return StandardHours(
        start_time=r.string("start_time"),
        end_time=r.string("end_time"),
        monday=r.items("monday", _parse_day_schedule),
        tuesday=r.items("tuesday", _parse_day_schedule),
        wednesday=r.items("wednesday", _parse_day_schedule),
        thursday=r.items("thursday", _parse_day_schedule),
        friday=r.items("friday", _parse_day_schedule),
        saturday=r.items("saturday", _parse_day_schedule),
        sunday=r.items("sunday", _parse_day_schedule),
    )


def _parse_maintenance_window(r: FieldReader) -> MaintenanceWindow:
    return MaintenanceWindow(
        start_datetime=r.string("start_datetime"),
        end_datetime=r.string("end_datetime"),
    )


def parse_exchange_schedule(r: FieldReader) -> ExchangeSchedule:
    """Convert the ``schedule`` object into ``ExchangeSchedule``."""
    return ExchangeSchedule(
        standard_hours=r.items("standard_hours", _parse_standard_hours),
        maintenance_windows=r.items("maintenance_windows", _parse_maintenance_window),
    )


def parse_market(r: FieldReader) -> Market:
    """Convert a market object into ``Market``."""
    return Market(
        ticker=r.string("ticker"),
        event_ticker=r.string("event_ticker"),
        market_type=r.string("market_type"),
        title=r.string("title"),
        subtitle=r.string("subtitle"),
        yes_sub_title=r.string("yes_sub_title"),
        no_sub_title=r.string("no_sub_title"),
        open_time=r.string("open_time"),
        close_time=r.string("close_time"),
        latest_expiration_time=r.string("latest_expiration_time"),
        settlement_timer_seconds=r.integer("settlement_timer_seconds"),
        status=r.string("status"),
        response_price_units=r.string("response_price_units"),
        notional_value=r.integer("notional_value"),
        tick_size=r.integer("tick_size"),
        yes_bid=r.integer("yes_bid"),
        yes_ask=r.integer("yes_ask"),
        no_bid=r.integer("no_bid"),
        no_ask=r.integer("no_ask"),
        last_price=r.integer("last_price"),
        previous_yes_bid=r.integer("previous_yes_bid"),
        previous_yes_ask=r.integer("previous_yes_ask"),
        previous_price=r.integer("previous_price"),
        volume=r.integer("volume"),
        volume_24h=r.integer("volume_24h"),
        liquidity=r.integer("liquidity"),
        open_interest=r.integer("open_interest"),
        result=r.settlement_result("result"),
        can_close_early=r.boolean("can_close_early"),
        expiration_value=r.string("expiration_value"),
        category=r.string("category"),
        risk_limit_cents=r.integer("risk_limit_cents"),
        rules_primary=r.string("rules_primary"),
        rules_secondary=r.string("rules_secondary"),
        expected_expiration_time=r.optional_string("expected_expiration_time"),
        expiration_time=r.optional_string("expiration_time"),
        cap_strike=r.optional_decimal("cap_strike"),
        floor_strike=r.optional_decimal("floor_strike"),
        strike_type=r.optional_string("strike_type"),
        settlement_value=r.optional_string("settlement_value"),
        functional_strike=r.optional_string("functional_strike"),
    )


def parse_event(r: FieldReader) -> Event:
    """Convert an event object into ``Event``.

    Raises:
        KalshiDecodeError: If ``event_ticker`` is empty.

    """
    event_ticker = r.string("event_ticker")
    if not event_ticker:
        raise KalshiDecodeError("event_ticker must not be empty", r.child("event_ticker"))
    return Event(
        event_ticker=event_ticker,
        series_ticker=r.string("series_ticker"),
        title=r.string("title"),
        sub_title=r.string("sub_title"),
        mutually_exclusive=r.boolean("mutually_exclusive"),
        category=r.string("category"),
        strike_date=r.optional_string("strike_date"),
        strike_period=r.optional_string("strike_period"),
        markets=r.optional_items("markets", parse_market),
    )


def _parse_settlement_source(r: FieldReader) -> SettlementSource:
    return SettlementSource(url=r.optional_string("url"), name=r.optional_string("name"))


_SERIES_FIELDS = frozenset(
    {
        "ticker",
        "frequency",
        "title",
        "category",
        "contract_url",
        "tags",
        "settlement_sources",
    }
)


def parse_series(r: FieldReader) -> Series:
    """Convert a series object into ``Series``, keeping unknown keys."""
    return Series(
        ticker=r.optional_string("ticker"),
        frequency=r.optional_string("frequency"),
        title=r.optional_string("title"),
        category=r.optional_string("category"),
        contract_url=r.optional_string("contract_url"),
        tags=r.strings("tags"),
        settlement_sources=r.items("settlement_sources", _parse_settlement_source),
        extra=r.extras(_SERIES_FIELDS),
    )


def parse_multivariate_event_collection(r: FieldReader) -> MultivariateEventCollection:
    """Convert a multivariate contract object into ``MultivariateEventCollection``."""
    return MultivariateEventCollection(
        collection_ticker=r.string("collection_ticker"),
        title=r.string("title"),
        description=r.string("description"),
        category=r.string("category"),
        created_time=r.string("created_time"),
        updated_time=r.string("updated_time"),
        tags=r.strings("tags"),
        markets=r.items("markets", parse_market),
    )


def parse_trade(r: FieldReader) -> Trade:
    """Convert a trade object into ``Trade``."""
    return Trade(
        trade_id=r.string("trade_id"),
        ticker=r.string("ticker"),
        taker_side=r.string("taker_side"),
        count=r.integer("count"),
        yes_price=r.integer("yes_price"),
        no_price=r.integer("no_price"),
        created_time=r.string("created_time"),
    )


def parse_candle(r: FieldReader) -> Candle:
    """Convert a candlestick object into ``Candle``."""
    return Candle(
        start_ts=r.integer("start_ts"),
        end_ts=r.integer("end_ts"),
        yes_open=r.integer("yes_open"),
        yes_high=r.integer("yes_high"),
        yes_low=r.integer("yes_low"),
        yes_close=r.integer("yes_close"),
        no_open=r.integer("no_open"),
        no_high=r.integer("no_high"),
        no_low=r.integer("no_low"),
        no_close=r.integer("no_close"),
        volume=r.integer("volume"),
        open_interest=r.integer("open_interest"),
    )


def _parse_levels(r: FieldReader, key: str) -> tuple[OrderbookLevel, ...] | None:
    """Parse one side of the book from ``[[price, size], ...]``."""
    values = r.array(key)
    if values is None:
        return None
    base = r.child(key)
    levels: list[OrderbookLevel] = []
    for i, pair in enumerate(values):
        path = f"{base}[{i}]"
        if not isinstance(pair, list) or len(cast("list[Any]", pair)) != _LEVEL_WIDTH:
            raise KalshiDecodeError("expected [price, size] pair", path, pair)
        price, size = cast("list[Any]", pair)
        levels.append(
            OrderbookLevel(price=_check_int(price, f"{path}[0]"), size=_check_int(size, f"{path}[1]"))
        )
    return tuple(levels)


def parse_orderbook(r: FieldReader) -> Orderbook:
    """Convert an orderbook object into ``Orderbook``."""
    return Orderbook(yes=_parse_levels(r, "yes"), no=_parse_levels(r, "no"))
