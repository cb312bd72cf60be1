"""Authentication module for the Kalshi API."""

from kalshi_tools.clients.kalshi.auth.signer import RsaPssSigner

__all__ = ["RsaPssSigner"]
