"""CLI command for listing recent Kalshi trades."""

import asyncio
from typing import Annotated

import typer

from kalshi_tools.apps.kalshi.cli._helpers import (
    CLIENT_ERRORS,
    abort,
    configure_verbose_logging,
    echo_cursor,
)
from kalshi_tools.clients.kalshi.client import KalshiClient

_DEFAULT_LIMIT = 50


def trades(
    ticker: Annotated[str | None, typer.Option(help="Filter by market ticker")] = None,
    min_ts: Annotated[int | None, typer.Option(help="Earliest trade time (Unix seconds)")] = None,
    max_ts: Annotated[int | None, typer.Option(help="Latest trade time (Unix seconds)")] = None,
    limit: Annotated[int, typer.Option(help="Maximum number of results")] = _DEFAULT_LIMIT,
    cursor: Annotated[str | None, typer.Option(help="Cursor from a previous page")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List executed trades, newest first."""
    configure_verbose_logging(verbose)
    asyncio.run(_trades(ticker=ticker, min_ts=min_ts, max_ts=max_ts, limit=limit, cursor=cursor))


async def _trades(
    *,
    ticker: str | None,
    min_ts: int | None,
    max_ts: int | None,
    limit: int,
    cursor: str | None,
) -> None:
    try:
        async with KalshiClient.from_config() as client:
            page = await client.get_trades(
                limit=limit, cursor=cursor, ticker=ticker, min_ts=min_ts, max_ts=max_ts
            )
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    if not page.items:
        typer.echo("No trades found")
        return

    typer.echo(f"\n{'Time':<28} {'Ticker':<32} {'Side':<5} {'Count':>7} {'Yes':>4} {'No':>4}")
    typer.echo("-" * 85)
    for t in page.items:
        typer.echo(
            f"{t.created_time:<28} {t.ticker:<32} {t.taker_side:<5} "
            f"{t.count:>7} {t.yes_price:>4} {t.no_price:>4}"
        )
    echo_cursor(page.cursor)
