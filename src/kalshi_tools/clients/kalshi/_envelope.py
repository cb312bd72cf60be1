"""Response envelope decoding.

Every endpoint wraps its payload in one of two shapes: a single entity
under a known key (``{"market": {...}}``), or a page of entities with an
optional cursor (``{"cursor": "...", "markets": [...]}``).  Sibling keys
the operation does not advertise are dropped here.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from kalshi_tools.clients.kalshi._decode import FieldReader
from kalshi_tools.clients.kalshi.exceptions import KalshiDecodeError
from kalshi_tools.clients.kalshi.models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

Parser = Callable[[FieldReader], T]


def parse_json(payload: bytes) -> FieldReader:
    """Parse raw response bytes into a reader over the top-level object.

    Raises:
        KalshiDecodeError: If the bytes are not JSON or not a JSON object.

    """
    try:
        data: Any = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise KalshiDecodeError(f"malformed JSON: {exc}") from exc
    return FieldReader(data)


def decode_root(payload: bytes, parser: Parser[T]) -> T:
    """Decode a response whose top-level object is the entity itself."""
    return parser(parse_json(payload))


def decode_entity(payload: bytes, key: str, parser: Parser[T]) -> T:
    """Decode a single-entity envelope ``{key: {...}}``.

    Args:
        payload: Raw response bytes.
        key: Envelope key holding the entity.
        parser: Field parser for the entity.

    Returns:
        The parsed entity; every other top-level key is ignored.

    Raises:
        KalshiDecodeError: If ``key`` is missing or the entity is malformed.

    """
    envelope = parse_json(payload)
    if envelope.raw.get(key) is None:
        raise KalshiDecodeError("missing required field", envelope.child(key))
    return parser(FieldReader(envelope.raw[key], envelope.child(key)))


def decode_items(payload: bytes, items_key: str, parser: Parser[T]) -> list[T]:
    """Decode the item array of a list envelope, ignoring any cursor.

    A ``null`` or absent array yields an empty list.
    """
    envelope = parse_json(payload)
    return list(envelope.items(items_key, parser))


def decode_page(payload: bytes, items_key: str, parser: Parser[T]) -> Page[T]:
    """Decode a paginated list envelope ``{cursor?, items_key?}``.

    Args:
        payload: Raw response bytes.
        items_key: Envelope key holding the item array.
        parser: Field parser for one item.

    Returns:
        ``Page`` with the cursor (``None`` when null or absent) and the
        parsed items (empty when the array is null or absent).

    Raises:
        KalshiDecodeError: If the cursor is not a string or an item is
            malformed.

    """
    envelope = parse_json(payload)
    cursor = envelope.optional_string("cursor")
    items = list(envelope.items(items_key, parser))
    logger.debug("Decoded %d %s (cursor=%s)", len(items), items_key, cursor is not None)
    return Page(cursor=cursor, items=items)
