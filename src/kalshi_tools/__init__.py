"""Typed async client and tools for the Kalshi prediction market API."""

__version__ = "0.1.0"
