"""Tests for Kalshi CLI commands."""

from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from kalshi_tools.apps.kalshi.cli import app
from kalshi_tools.clients.kalshi._decode import FieldReader, parse_event, parse_market
from kalshi_tools.clients.kalshi.exceptions import (
    KalshiAuthenticationError,
    KalshiDecodeError,
    KalshiNotFoundError,
)
from kalshi_tools.clients.kalshi.models import (
    DaySchedule,
    ExchangeSchedule,
    ExchangeStatus,
    MaintenanceWindow,
    Orderbook,
    OrderbookLevel,
    Page,
    Series,
    StandardHours,
    Trade,
)
from kalshi_tools.core.config import ConfigError

_CLI = "kalshi_tools.apps.kalshi.cli"


@pytest.fixture
def runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


def _patch_client(module: str) -> Iterator[AsyncMock]:
    """Swap ``KalshiClient`` in one command module for an async mock."""
    with patch(f"{_CLI}.{module}.KalshiClient") as mock_cls:
        mock_client = AsyncMock()
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        mock_cls.from_config = MagicMock(return_value=mock_client)
        yield mock_client


@pytest.fixture
def exchange_client() -> Iterator[AsyncMock]:
    """Mock client for the exchange commands."""
    yield from _patch_client("exchange_cmd")


@pytest.fixture
def markets_client() -> Iterator[AsyncMock]:
    """Mock client for the markets and events commands."""
    yield from _patch_client("markets_cmd")


@pytest.fixture
def book_client() -> Iterator[AsyncMock]:
    """Mock client for the book command."""
    yield from _patch_client("book_cmd")


@pytest.fixture
def trades_client() -> Iterator[AsyncMock]:
    """Mock client for the trades command."""
    yield from _patch_client("trades_cmd")


@pytest.fixture
def series_client() -> Iterator[AsyncMock]:
    """Mock client for the series command."""
    yield from _patch_client("series_cmd")


class TestStatusCommand:
    """Test suite for the status CLI command."""

    def test_status_displays_flags(self, runner: CliRunner, exchange_client: AsyncMock) -> None:
        """Test status prints both activity flags."""
        exchange_client.get_exchange_status = AsyncMock(
            return_value=ExchangeStatus(trading_active=False, exchange_active=True)
        )

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Exchange active: yes" in result.output
        assert "Trading active:  no" in result.output

    def test_status_error_handling(self, runner: CliRunner, exchange_client: AsyncMock) -> None:
        """Test status exits non-zero on a decode error."""
        exchange_client.get_exchange_status = AsyncMock(
            side_effect=KalshiDecodeError("missing required field", "$.trading_active")
        )

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 1


class TestScheduleCommand:
    """Test suite for the schedule CLI command."""

    def test_schedule_displays_hours(self, runner: CliRunner, exchange_client: AsyncMock) -> None:
        """Test trading sessions, closed days and maintenance windows are shown."""
        exchange_client.get_exchange_schedule = AsyncMock(
            return_value=ExchangeSchedule(
                standard_hours=(
                    StandardHours(
                        start_time="2024-01-01T00:00:00Z",
                        end_time="2099-01-01T00:00:00Z",
                        monday=(DaySchedule(open_time="08:00", close_time="17:00"),),
                    ),
                ),
                maintenance_windows=(
                    MaintenanceWindow(
                        start_datetime="2025-01-05T08:00:00Z",
                        end_datetime="2025-01-05T10:00:00Z",
                    ),
                ),
            )
        )

        result = runner.invoke(app, ["schedule"])

        assert result.exit_code == 0
        assert "08:00-17:00" in result.output
        assert "closed" in result.output
        assert "2025-01-05T08:00:00Z -> 2025-01-05T10:00:00Z" in result.output

    def test_schedule_without_maintenance(
        self, runner: CliRunner, exchange_client: AsyncMock
    ) -> None:
        """Test an empty maintenance list is reported."""
        exchange_client.get_exchange_schedule = AsyncMock(return_value=ExchangeSchedule())

        result = runner.invoke(app, ["schedule"])

        assert result.exit_code == 0
        assert "No maintenance windows scheduled" in result.output


class TestMarketsCommand:
    """Test suite for the markets CLI command."""

    def test_markets_displays_results(
        self,
        runner: CliRunner,
        markets_client: AsyncMock,
        market_payload: Callable[..., dict[str, Any]],
    ) -> None:
        """Test markets lists prices and prints the next cursor."""
        market = parse_market(FieldReader(market_payload()))
        markets_client.get_markets = AsyncMock(return_value=Page(cursor="next1", items=[market]))

        result = runner.invoke(app, ["markets", "--status", "open", "--limit", "5"])

        assert result.exit_code == 0
        assert "KXBTCD-25JAN01-T100000" in result.output
        assert "15230" in result.output
        assert "Next cursor: next1" in result.output
        markets_client.get_markets.assert_awaited_once_with(
            limit=5, cursor=None, event_ticker=None, series_ticker=None, status="open"
        )

    def test_markets_no_results(self, runner: CliRunner, markets_client: AsyncMock) -> None:
        """Test markets shows a message when the page is empty."""
        markets_client.get_markets = AsyncMock(return_value=Page(cursor=None, items=[]))

        result = runner.invoke(app, ["markets"])

        assert result.exit_code == 0
        assert "No markets found" in result.output

    def test_markets_error_handling(self, runner: CliRunner, markets_client: AsyncMock) -> None:
        """Test markets exits non-zero on an API error."""
        markets_client.get_markets = AsyncMock(side_effect=KalshiNotFoundError("gone", 404))

        result = runner.invoke(app, ["markets"])

        assert result.exit_code == 1


class TestEventsCommand:
    """Test suite for the events CLI command."""

    def test_events_displays_results(
        self,
        runner: CliRunner,
        markets_client: AsyncMock,
        event_payload: Callable[..., dict[str, Any]],
    ) -> None:
        """Test events lists tickers and categories."""
        event = parse_event(FieldReader(event_payload()))
        markets_client.get_events = AsyncMock(return_value=Page(cursor=None, items=[event]))

        result = runner.invoke(app, ["events", "--series", "KXBTCD"])

        assert result.exit_code == 0
        assert "KXBTCD-25JAN01" in result.output
        assert "Crypto" in result.output
        assert "Next cursor" not in result.output

    def test_events_no_results(self, runner: CliRunner, markets_client: AsyncMock) -> None:
        """Test events shows a message when the page is empty."""
        markets_client.get_events = AsyncMock(return_value=Page(cursor="", items=[]))

        result = runner.invoke(app, ["events"])

        assert result.exit_code == 0
        assert "No events found" in result.output


class TestBookCommand:
    """Test suite for the book CLI command."""

    def test_book_displays_levels_best_first(
        self, runner: CliRunner, book_client: AsyncMock
    ) -> None:
        """Test levels are printed highest price first."""
        book_client.get_orderbook = AsyncMock(
            return_value=Orderbook(
                yes=(OrderbookLevel(price=38, size=5), OrderbookLevel(price=41, size=120)),
                no=(OrderbookLevel(price=55, size=300),),
            )
        )

        result = runner.invoke(app, ["book", "MKT-A", "--depth", "3"])

        assert result.exit_code == 0
        assert "Orderbook: MKT-A" in result.output
        rows = [line.split() for line in result.output.splitlines()]
        assert ["41", "120", "55", "300"] in rows
        assert rows.index(["41", "120", "55", "300"]) < rows.index(["38", "5"])
        book_client.get_orderbook.assert_awaited_once_with("MKT-A", depth=3)

    def test_book_empty(self, runner: CliRunner, book_client: AsyncMock) -> None:
        """Test a book with no sides is reported as empty."""
        book_client.get_orderbook = AsyncMock(return_value=Orderbook())

        result = runner.invoke(app, ["book", "MKT-A"])

        assert result.exit_code == 0
        assert "No resting orders" in result.output

    def test_book_error_handling(self, runner: CliRunner, book_client: AsyncMock) -> None:
        """Test book exits non-zero when the market is unknown."""
        book_client.get_orderbook = AsyncMock(side_effect=KalshiNotFoundError("not found", 404))

        result = runner.invoke(app, ["book", "NOPE"])

        assert result.exit_code == 1


class TestTradesCommand:
    """Test suite for the trades CLI command."""

    def test_trades_displays_results(self, runner: CliRunner, trades_client: AsyncMock) -> None:
        """Test trades lists side, count and prices."""
        trade = Trade(
            trade_id="t1",
            ticker="MKT-A",
            taker_side="yes",
            count=17,
            yes_price=43,
            no_price=57,
            created_time="2025-01-01T12:00:00Z",
        )
        trades_client.get_trades = AsyncMock(return_value=Page(cursor="c2", items=[trade]))

        result = runner.invoke(app, ["trades", "--ticker", "MKT-A"])

        assert result.exit_code == 0
        assert "2025-01-01T12:00:00Z" in result.output
        assert "Next cursor: c2" in result.output

    def test_trades_no_results(self, runner: CliRunner, trades_client: AsyncMock) -> None:
        """Test trades shows a message when the page is empty."""
        trades_client.get_trades = AsyncMock(return_value=Page(cursor=None, items=[]))

        result = runner.invoke(app, ["trades"])

        assert result.exit_code == 0
        assert "No trades found" in result.output


class TestSeriesCommand:
    """Test suite for the series CLI command."""

    def test_series_displays_results(self, runner: CliRunner, series_client: AsyncMock) -> None:
        """Test series lists tickers and tags, with dashes for missing fields."""
        series_client.get_series_list = AsyncMock(
            return_value=Page(
                cursor=None,
                items=[Series(ticker="KXBTCD", category="Crypto", tags=("BTC", "Daily"))],
            )
        )

        result = runner.invoke(app, ["series", "--tags", "BTC"])

        assert result.exit_code == 0
        assert "KXBTCD" in result.output
        assert "BTC, Daily" in result.output
        series_client.get_series_list.assert_awaited_once_with(
            limit=20, cursor=None, category=None, tags="BTC"
        )

    def test_series_requires_credentials(
        self, runner: CliRunner, series_client: AsyncMock
    ) -> None:
        """Test a missing-credentials error exits non-zero."""
        series_client.get_series_list = AsyncMock(
            side_effect=KalshiAuthenticationError(
                "Signed request requires an API key ID and private key"
            )
        )

        result = runner.invoke(app, ["series"])

        assert result.exit_code == 1


class TestClientSetupErrors:
    """Test suite for failures raised while building the client."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("Required environment variable ${KALSHI_BASE_URL} is not set"),
            KalshiAuthenticationError("Cannot load Kalshi private key from /missing.pem"),
        ],
    )
    def test_status_reports_setup_error(self, runner: CliRunner, error: Exception) -> None:
        """Test a bad config or key file exits 1 with a one-line error."""
        with patch(f"{_CLI}.exchange_cmd.KalshiClient") as mock_cls:
            mock_cls.from_config = MagicMock(side_effect=error)

            result = runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestVerboseOption:
    """Test suite for the --verbose flag shared by every command."""

    @pytest.mark.parametrize(
        ("args", "fixture_name", "method"),
        [
            (["status"], "exchange_client", "get_exchange_status"),
            (["book", "MKT-A"], "book_client", "get_orderbook"),
            (["trades"], "trades_client", "get_trades"),
            (["series"], "series_client", "get_series_list"),
        ],
    )
    def test_verbose_enables_debug_logging(
        self,
        runner: CliRunner,
        request: pytest.FixtureRequest,
        args: list[str],
        fixture_name: str,
        method: str,
    ) -> None:
        """Test -v turns on debug logging before the request runs."""
        mock_client: AsyncMock = request.getfixturevalue(fixture_name)
        setattr(mock_client, method, AsyncMock(side_effect=KalshiNotFoundError("gone", 404)))
        module = fixture_name.removesuffix("_client")

        with patch(f"{_CLI}.{module}_cmd.configure_verbose_logging") as mock_logging:
            result = runner.invoke(app, [*args, "-v"])

        assert result.exit_code == 1
        mock_logging.assert_called_once_with(True)
