"""Typed async facade for Kalshi market data.

Each public method is one request/response round trip: encode the query,
GET through the transport, unwrap the envelope and return typed models.
Pagination is driven by the caller, who passes the returned cursor back in.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from typing import Any, TypeVar
from urllib.parse import quote

from kalshi_tools.clients.kalshi import _decode
from kalshi_tools.clients.kalshi._envelope import (
    decode_entity,
    decode_items,
    decode_page,
    decode_root,
)
from kalshi_tools.clients.kalshi._query import encode_query, encode_value, join_values
from kalshi_tools.clients.kalshi._transport import KalshiTransport
from kalshi_tools.clients.kalshi.auth.signer import RsaPssSigner
from kalshi_tools.clients.kalshi.exceptions import (
    KalshiAuthenticationError,
    KalshiQueryEncodingError,
)
from kalshi_tools.clients.kalshi.models import (
    Candle,
    Event,
    ExchangeSchedule,
    ExchangeStatus,
    Market,
    MarketStatus,
    MultivariateEventCollection,
    Orderbook,
    Page,
    Series,
    Trade,
)
from kalshi_tools.core.config import get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_TIMEOUT = 30.0


def _segment(value: str) -> str:
    """Percent-encode a ticker for use as a single path segment."""
    return quote(value, safe="")


class KalshiClient:
    """Typed async client for the Kalshi trade API.

    Read-only operations over exchange, event, market and series data.
    Only ``get_series_list`` needs signing credentials; everything else
    works anonymously.

    Args:
        base_url: Base URL for the trade API.
        timeout: Request timeout in seconds.
        api_key_id: Kalshi API key ID for signed requests.
        signer: RSA-PSS signer holding the matching private key.

    """

    BASE_URL = "https://api.elections.kalshi.com/trade-api/v2"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
        api_key_id: str | None = None,
        signer: RsaPssSigner | None = None,
    ) -> None:
        """Initialize the Kalshi client.

        Args:
            base_url: Base URL for the trade API.
            timeout: Request timeout in seconds.
            api_key_id: Kalshi API key ID for signed requests.
            signer: RSA-PSS signer holding the matching private key.

        """
        self._transport = KalshiTransport(
            base_url=base_url,
            timeout=timeout,
            api_key_id=api_key_id,
            signer=signer,
        )

    @property
    def base_url(self) -> str:
        """Return the normalised base URL."""
        return self._transport.base_url

    @classmethod
    def from_config(cls) -> "KalshiClient":
        """Create a client from the ``kalshi`` configuration section.

        A signer is attached only when both ``api_key_id`` and
        ``private_key_path`` are configured.

        Raises:
            KalshiAuthenticationError: If the configured key file is missing
                or does not hold an RSA private key.
            ConfigError: If the configuration itself cannot be loaded.

        """
        settings = get_config().get_kalshi_config()
        base_url = settings.get("base_url") or cls.BASE_URL
        timeout = float(settings.get("timeout", _DEFAULT_TIMEOUT))
        api_key_id = settings.get("api_key_id") or None
        key_path = settings.get("private_key_path") or None

        signer = None
        if api_key_id and key_path:
            try:
                private_key = RsaPssSigner.load_private_key_from_file(key_path)
            except (OSError, TypeError, ValueError) as exc:
                msg = f"Cannot load Kalshi private key from {key_path}: {exc}"
                raise KalshiAuthenticationError(msg) from exc
            signer = RsaPssSigner(private_key)
        else:
            logger.info("Kalshi credentials not configured; signed endpoints unavailable")

        return cls(base_url=base_url, timeout=timeout, api_key_id=api_key_id, signer=signer)

    async def get_exchange_status(self) -> ExchangeStatus:
        """Fetch whether the exchange and trading are currently active."""
        payload = await self._transport.get("/exchange/status")
        return decode_root(payload, _decode.parse_exchange_status)

    async def get_exchange_schedule(self) -> ExchangeSchedule:
        """Fetch the weekly trading hours and maintenance windows."""
        payload = await self._transport.get("/exchange/schedule")
        return decode_entity(payload, "schedule", _decode.parse_exchange_schedule)

    async def get_events(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        status: str | MarketStatus | None = None,
        series_ticker: str | None = None,
        with_nested_markets: bool | None = None,
    ) -> Page[Event]:
        """Fetch a page of events.

        Args:
            limit: Maximum number of events to return.
            cursor: Cursor from the previous page.
            status: Filter by event status.
            series_ticker: Filter by parent series.
            with_nested_markets: Embed each event's markets.

        Returns:
            ``Page`` of events and the next cursor.

        """
        query = encode_query(
            [
                ("limit", limit),
                ("cursor", cursor),
                ("status", status),
                ("series_ticker", series_ticker),
                ("with_nested_markets", with_nested_markets),
            ]
        )
        payload = await self._transport.get(f"/events{query}")
        return decode_page(payload, "events", _decode.parse_event)

    async def get_event(self, event_ticker: str) -> Event:
        """Fetch one event by ticker.

        The response also carries a top-level ``markets`` array; it is not
        part of this operation's result.
        """
        payload = await self._transport.get(f"/events/{_segment(event_ticker)}")
        return decode_entity(payload, "event", _decode.parse_event)

    async def get_markets(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        event_ticker: str | None = None,
        series_ticker: str | None = None,
        status: str | MarketStatus | None = None,
        tickers: str | Sequence[str] | None = None,
        min_close_ts: int | None = None,
        max_close_ts: int | None = None,
    ) -> Page[Market]:
        """Fetch a page of markets.

        Args:
            limit: Maximum number of markets to return.
            cursor: Cursor from the previous page.
            event_ticker: Filter by parent event.
            series_ticker: Filter by parent series.
            status: Filter by market status.
            tickers: Market tickers, as a comma list or a sequence.
            min_close_ts: Earliest close time (Unix seconds).
            max_close_ts: Latest close time (Unix seconds).

        Returns:
            ``Page`` of markets and the next cursor.

        """
        query = encode_query(
            [
                ("limit", limit),
                ("cursor", cursor),
                ("event_ticker", event_ticker),
                ("series_ticker", series_ticker),
                ("status", status),
                ("tickers", join_values(tickers)),
                ("min_close_ts", min_close_ts),
                ("max_close_ts", max_close_ts),
            ]
        )
        payload = await self._transport.get(f"/markets{query}")
        return decode_page(payload, "markets", _decode.parse_market)

    async def get_market(self, ticker: str) -> Market:
        """Fetch one market by ticker."""
        payload = await self._transport.get(f"/markets/{_segment(ticker)}")
        return decode_entity(payload, "market", _decode.parse_market)

    async def get_orderbook(self, ticker: str, depth: int | None = None) -> Orderbook:
        """Fetch the resting orders for a market.

        Args:
            ticker: Market ticker.
            depth: Number of price levels per side; full book when ``None``.

        Returns:
            ``Orderbook`` with a ``None`` side when the server omitted it.

        Raises:
            KalshiQueryEncodingError: If ``depth`` is not an integer.

        """
        path = f"/markets/{_segment(ticker)}/orderbook"
        # depth goes straight onto the path rather than through encode_query
        if depth is not None:
            if isinstance(depth, bool):
                raise KalshiQueryEncodingError("unsupported query value type bool", "depth")
            path += f"?depth={encode_value('depth', depth)}"
        payload = await self._transport.get(path)
        return decode_entity(payload, "orderbook", _decode.parse_orderbook)

    async def get_orderbook_full(self, ticker: str) -> Orderbook:
        """Fetch every price level of a market's orderbook."""
        return await self.get_orderbook(ticker)

    async def get_market_candlesticks(
        self,
        ticker: str,
        series_ticker: str,
        *,
        start_ts: int | None = None,
        end_ts: int | None = None,
        period_interval: int | None = None,
    ) -> list[Candle]:
        """Fetch OHLC candlesticks for a market.

        Args:
            ticker: Market ticker.
            series_ticker: Ticker of the market's series.
            start_ts: Only candles ending at or after this time.
            end_ts: Only candles ending at or before this time.
            period_interval: Candle length in minutes. The API accepts 1,
                60 and 1440; other values are sent as-is.

        Returns:
            Candles in the order the API returned them.

        """
        query = encode_query(
            [
                ("start_ts", start_ts),
                ("end_ts", end_ts),
                ("period_interval", period_interval),
            ]
        )
        path = (
            f"/series/{_segment(series_ticker)}/markets/{_segment(ticker)}/candlesticks{query}"
        )
        payload = await self._transport.get(path)
        return decode_items(payload, "candlesticks", _decode.parse_candle)

    async def get_trades(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        ticker: str | None = None,
        min_ts: int | None = None,
        max_ts: int | None = None,
    ) -> Page[Trade]:
        """Fetch a page of executed trades, newest first.

        Args:
            limit: Maximum number of trades to return.
            cursor: Cursor from the previous page.
            ticker: Filter by market ticker.
            min_ts: Earliest trade time (Unix seconds).
            max_ts: Latest trade time (Unix seconds).

        Returns:
            ``Page`` of trades and the next cursor.

        """
        query = encode_query(
            [
                ("limit", limit),
                ("cursor", cursor),
                ("ticker", ticker),
                ("min_ts", min_ts),
                ("max_ts", max_ts),
            ]
        )
        payload = await self._transport.get(f"/markets/trades{query}")
        return decode_page(payload, "trades", _decode.parse_trade)

    async def get_series_list(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        category: str | None = None,
        tags: str | Sequence[str] | None = None,
    ) -> Page[Series]:
        """Fetch a page of series.  Requires signing credentials.

        Args:
            limit: Maximum number of series to return.
            cursor: Cursor from the previous page.
            category: Filter by category.
            tags: Tags, as a comma list or a sequence.

        Returns:
            ``Page`` of series and the next cursor.

        Raises:
            KalshiAuthenticationError: If no credentials are configured.

        """
        query = encode_query(
            [
                ("limit", limit),
                ("cursor", cursor),
                ("category", category),
                ("tags", join_values(tags)),
            ]
        )
        payload = await self._transport.get(f"/series{query}", signed=True)
        return decode_page(payload, "series", _decode.parse_series)

    async def get_series(self, series_ticker: str) -> Series:
        """Fetch one series by ticker."""
        payload = await self._transport.get(f"/series/{_segment(series_ticker)}")
        return decode_entity(payload, "series", _decode.parse_series)

    async def get_multivariate_event_collections(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        status: str | None = None,
        series_ticker: str | None = None,
    ) -> Page[MultivariateEventCollection]:
        """Fetch a page of multivariate event collections."""
        query = encode_query(
            [
                ("limit", limit),
                ("cursor", cursor),
                ("status", status),
                ("series_ticker", series_ticker),
            ]
        )
        payload = await self._transport.get(f"/multivariate_event_collections{query}")
        return decode_page(
            payload, "multivariate_contracts", _decode.parse_multivariate_event_collection
        )

    async def get_multivariate_event_collection(
        self, collection_ticker: str
    ) -> MultivariateEventCollection:
        """Fetch one multivariate event collection by ticker."""
        payload = await self._transport.get(
            f"/multivariate_event_collections/{_segment(collection_ticker)}"
        )
        return decode_entity(
            payload, "multivariate_contract", _decode.parse_multivariate_event_collection
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._transport.close()

    async def __aenter__(self) -> "KalshiClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()


async def iter_pages(
    operation: Callable[..., Awaitable[Page[T]]],
    **filters: Any,
) -> AsyncIterator[Page[T]]:
    """Follow cursors through a paginated list operation.

    Call ``operation`` repeatedly, feeding each returned cursor into the
    next call, until the server stops sending one.

    Args:
        operation: A bound list method such as ``client.get_markets``.
        **filters: Keyword filters passed on every call (``cursor`` excluded).

    Yields:
        Each ``Page`` in order, including the last one.

    """
    cursor: str | None = filters.pop("cursor", None)
    while True:
        page = await operation(cursor=cursor, **filters)
        yield page
        if not page.cursor:
            return
        cursor = page.cursor
