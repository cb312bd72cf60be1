"""Query string construction for Kalshi list endpoints.

Parameters are passed as ordered ``(name, value)`` pairs.  Pairs whose
value is ``None`` are dropped entirely, so an unset filter never reaches
the server as ``name=``.
"""

from collections.abc import Sequence
from enum import Enum
from urllib.parse import quote

from kalshi_tools.clients.kalshi.exceptions import KalshiQueryEncodingError

QueryValue = str | int | bool | Enum

QueryParams = Sequence[tuple[str, QueryValue | None]]


def encode_value(name: str, value: QueryValue) -> str:
    """Return the canonical text form of a single query value.

    Args:
        name: Parameter name, used in error messages.
        value: Value to serialise.

    Returns:
        ``true``/``false`` for booleans, decimal text for integers, the
        member value for enums and the string itself otherwise.

    Raises:
        KalshiQueryEncodingError: If the value type is not supported.

    """
    # bool first: it is also an int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return encode_value(name, value.value)
    msg = f"unsupported query value type {type(value).__name__}"
    raise KalshiQueryEncodingError(msg, name)


def encode_query(params: QueryParams) -> str:
    """Build a ``?``-prefixed query string from ordered parameters.

    Args:
        params: Ordered ``(name, value)`` pairs; ``None`` values are skipped.

    Returns:
        ``"?a=1&b=2"`` in declaration order, or ``""`` when every value
        is ``None``.

    Raises:
        KalshiQueryEncodingError: If a value has an unsupported type or
            cannot be percent-encoded.

    """
    parts: list[str] = []
    for name, value in params:
        if value is None:
            continue
        text = encode_value(name, value)
        try:
            parts.append(f"{quote(name, safe='')}={quote(text, safe='')}")
        except UnicodeEncodeError as exc:
            raise KalshiQueryEncodingError(f"cannot percent-encode value: {exc}", name) from exc
    if not parts:
        return ""
    return "?" + "&".join(parts)


def join_values(value: str | Sequence[str] | None) -> str | None:
    """Collapse a multi-valued filter into the comma list the API expects."""
    if value is None or isinstance(value, str):
        return value
    return ",".join(value)
