"""Command-line applications built on the exchange clients."""
