"""Shared helpers for Kalshi CLI commands."""

import logging

import typer

from kalshi_tools.clients.kalshi.exceptions import KalshiError
from kalshi_tools.core.config import ConfigError

# Failures a command reports as "Error: ..." instead of a traceback
CLIENT_ERRORS = (KalshiError, ConfigError)


def configure_verbose_logging(verbose: bool) -> None:
    """Enable DEBUG logging of requests and decoded pages when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
        datefmt="%H:%M:%S",
    )


def abort(exc: Exception) -> typer.Exit:
    """Report a client or configuration error on stderr and return the exit to raise."""
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def echo_cursor(cursor: str | None) -> None:
    """Print the next-page cursor, if any."""
    if cursor:
        typer.echo(f"\nNext cursor: {cursor}")
