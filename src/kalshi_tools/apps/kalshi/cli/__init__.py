"""CLI subpackage for the Kalshi market data app.

Create the Typer application and register all command modules.
"""

import typer

from kalshi_tools.apps.kalshi.cli.book_cmd import book
from kalshi_tools.apps.kalshi.cli.exchange_cmd import schedule, status
from kalshi_tools.apps.kalshi.cli.markets_cmd import events, markets
from kalshi_tools.apps.kalshi.cli.series_cmd import series
from kalshi_tools.apps.kalshi.cli.trades_cmd import trades

app = typer.Typer(help="Kalshi prediction market data")

app.command()(status)
app.command()(schedule)
app.command()(events)
app.command()(markets)
app.command()(book)
app.command()(trades)
app.command()(series)

__all__ = ["app"]
