"""Shared configuration for kalshi tools."""
