"""CLI command for listing Kalshi series.

The series listing is a signed endpoint, so ``KALSHI_API_KEY_ID`` and
``KALSHI_PRIVATE_KEY_PATH`` must be configured.
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


def series(
    category: Annotated[str | None, typer.Option(help="Filter by category")] = None,
    tags: Annotated[str | None, typer.Option(help="Comma-separated tags")] = None,
    limit: Annotated[int, typer.Option(help="Maximum number of results")] = _DEFAULT_LIMIT,
    cursor: Annotated[str | None, typer.Option(help="Cursor from a previous page")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List series with their category and tags."""
    configure_verbose_logging(verbose)
    asyncio.run(_series(category=category, tags=tags, limit=limit, cursor=cursor))


async def _series(
    *, category: str | None, tags: str | None, limit: int, cursor: str | None
) -> None:
    try:
        async with KalshiClient.from_config() as client:
            page = await client.get_series_list(
                limit=limit, cursor=cursor, category=category, tags=tags
            )
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    if not page.items:
        typer.echo("No series found")
        return

    typer.echo(f"\n{'Ticker':<20} {'Frequency':<10} {'Category':<20} Tags")
    typer.echo("-" * 80)
    for s in page.items:
        typer.echo(
            f"{s.ticker or '-':<20} {s.frequency or '-':<10} "
            f"{s.category or '-':<20} {', '.join(s.tags)}"
        )
    echo_cursor(page.cursor)
