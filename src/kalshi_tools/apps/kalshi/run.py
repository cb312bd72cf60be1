"""CLI entry point for the Kalshi market data app."""

from kalshi_tools.apps.kalshi.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the Kalshi CLI application."""
    app()


if __name__ == "__main__":
    main()
