"""CLI commands for exchange status and trading hours."""

import asyncio
from typing import Annotated

import typer

from kalshi_tools.apps.kalshi.cli._helpers import CLIENT_ERRORS, abort, configure_verbose_logging
from kalshi_tools.clients.kalshi.client import KalshiClient
from kalshi_tools.clients.kalshi.models import DaySchedule

_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def status(verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False) -> None:
    """Show whether the exchange and trading are active."""
    configure_verbose_logging(verbose)
    asyncio.run(_status())


async def _status() -> None:
    try:
        async with KalshiClient.from_config() as client:
            exchange = await client.get_exchange_status()
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    typer.echo(f"Exchange active: {'yes' if exchange.exchange_active else 'no'}")
    typer.echo(f"Trading active:  {'yes' if exchange.trading_active else 'no'}")


def schedule(verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False) -> None:
    """Show weekly trading hours and maintenance windows."""
    configure_verbose_logging(verbose)
    asyncio.run(_schedule())


def _format_sessions(sessions: tuple[DaySchedule, ...]) -> str:
    if not sessions:
        return "closed"
    return ", ".join(f"{s.open_time}-{s.close_time}" for s in sessions)


async def _schedule() -> None:
    try:
        async with KalshiClient.from_config() as client:
            exchange_schedule = await client.get_exchange_schedule()
    except CLIENT_ERRORS as exc:
        raise abort(exc) from exc

    for hours in exchange_schedule.standard_hours:
        typer.echo(f"\nStandard hours {hours.start_time} to {hours.end_time}")
        for day in _DAYS:
            typer.echo(f"  {day.capitalize():<10} {_format_sessions(getattr(hours, day))}")

    if not exchange_schedule.maintenance_windows:
        typer.echo("\nNo maintenance windows scheduled")
        return
    typer.echo("\nMaintenance windows:")
    for window in exchange_schedule.maintenance_windows:
        typer.echo(f"  {window.start_datetime} -> {window.end_datetime}")
