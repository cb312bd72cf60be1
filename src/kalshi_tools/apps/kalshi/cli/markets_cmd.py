"""CLI commands for listing Kalshi events and markets.

Print one page per invocation; pass the printed cursor back with
``--cursor`` to fetch the next page.
"""

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

_DEFAULT_LIMIT = 20
_MAX_TITLE_LEN = 48


def _truncate(text: str) -> str:
    return text if len(text) <= _MAX_TITLE_LEN else text[: _MAX_TITLE_LEN - 3] + "..."


def markets(
    status: Annotated[str | None, typer.Option(help="open, closed or settled")] = None,
    event: Annotated[str | None, typer.Option(help="Filter by event ticker")] = None,
    series: Annotated[str | None, typer.Option(help="Filter by series ticker")] = None,
    limit: Annotated[int, typer.Option(help="Maximum number of results")] = _DEFAULT_LIMIT,
    cursor: Annotated[str | None, typer.Option(help="Cursor from a previous page")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List markets with their current YES prices and volume."""
    configure_verbose_logging(verbose)
    asyncio.run(
        _markets(status=status, event=event, series=series, limit=limit, cursor=cursor)
    )


async def _markets(
    *,
    status: str | None,
    event: str | None,
    series: str | None,
    limit: int,
    cursor: str | None,
) -> None:
    try:
        async with KalshiClient.from_config() as client:
            page = await client.get_markets(
                limit=limit,
                cursor=cursor,
                event_ticker=event,
                series_ticker=series,
                status=status,
            )
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    if not page.items:
        typer.echo("No markets found")
        return

    typer.echo(f"\n{'Ticker':<32} {'Title':<48} {'Bid':>4} {'Ask':>4} {'Last':>4} {'Volume':>10}")
    typer.echo("-" * 108)
    for m in page.items:
        typer.echo(
            f"{m.ticker:<32} {_truncate(m.title):<48} "
            f"{m.yes_bid:>4} {m.yes_ask:>4} {m.last_price:>4} {m.volume:>10}"
        )
    echo_cursor(page.cursor)


def events(
    status: Annotated[str | None, typer.Option(help="Filter by event status")] = None,
    series: Annotated[str | None, typer.Option(help="Filter by series ticker")] = None,
    limit: Annotated[int, typer.Option(help="Maximum number of results")] = _DEFAULT_LIMIT,
    cursor: Annotated[str | None, typer.Option(help="Cursor from a previous page")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List events."""
    configure_verbose_logging(verbose)
    asyncio.run(_events(status=status, series=series, limit=limit, cursor=cursor))


async def _events(
    *, status: str | None, series: str | None, limit: int, cursor: str | None
) -> None:
    try:
        async with KalshiClient.from_config() as client:
            page = await client.get_events(
                limit=limit, cursor=cursor, status=status, series_ticker=series
            )
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    if not page.items:
        typer.echo("No events found")
        return

    typer.echo(f"\n{'Event':<32} {'Title':<48} {'Category':<20}")
    typer.echo("-" * 102)
    for e in page.items:
        typer.echo(f"{e.event_ticker:<32} {_truncate(e.title):<48} {e.category:<20}")
    echo_cursor(page.cursor)
