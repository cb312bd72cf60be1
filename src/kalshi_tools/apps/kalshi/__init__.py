"""Kalshi market data command-line app."""
