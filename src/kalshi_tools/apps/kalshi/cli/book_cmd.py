"""CLI command for displaying a Kalshi market orderbook.

Kalshi books hold YES bids and NO bids only; both sides are listed
best price first.
"""

import asyncio
from typing import Annotated

import typer

from kalshi_tools.apps.kalshi.cli._helpers import CLIENT_ERRORS, abort, configure_verbose_logging
from kalshi_tools.clients.kalshi.client import KalshiClient
from kalshi_tools.clients.kalshi.models import OrderbookLevel

_DEFAULT_DEPTH = 10


def book(
    ticker: str,
    depth: Annotated[int, typer.Option(help="Number of price levels to request")] = _DEFAULT_DEPTH,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Display the orderbook for a market."""
    configure_verbose_logging(verbose)
    asyncio.run(_book(ticker=ticker, depth=depth))


def _best_first(levels: tuple[OrderbookLevel, ...] | None) -> list[OrderbookLevel]:
    return sorted(levels or (), key=lambda level: level.price, reverse=True)


async def _book(*, ticker: str, depth: int) -> None:
    try:
        async with KalshiClient.from_config() as client:
            orderbook = await client.get_orderbook(ticker, depth=depth)
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    typer.echo(f"\nOrderbook: {ticker}")
    if orderbook.yes is None and orderbook.no is None:
        typer.echo("No resting orders")
        return

    yes = _best_first(orderbook.yes)
    no = _best_first(orderbook.no)
    typer.echo(f"{'YES':<20}{'NO':<20}")
    typer.echo(f"{'Price':>6} {'Size':>10}   {'Price':>6} {'Size':>10}")
    typer.echo("-" * 40)
    for i in range(max(len(yes), len(no))):
        yes_str = f"{yes[i].price:>6} {yes[i].size:>10}" if i < len(yes) else " " * 17
        no_str = f"{no[i].price:>6} {no[i].size:>10}" if i < len(no) else ""
        typer.echo(f"{yes_str}   {no_str}")
