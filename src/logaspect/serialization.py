"""JSON rendering of call arguments and results.

JsonEncoder wraps pydantic_core's serializer so log lines carry the same
compact JSON an HTTP response would (e.g. ["Ada"]). Supported out of the box:
builtins, Pydantic models, dataclasses, datetimes, enums, UUIDs, Decimals,
paths and bytes. Generators and other one-shot iterators are rejected, since
rendering them would hand the caller an exhausted iterator.

The encoder holds only read-only configuration and is safe to share between
threads and concurrent requests.
"""

from __future__ import annotations

__all__ = [
    "JsonEncoder",
    "get_default_encoder",
]

from collections.abc import Iterator
from typing import Any, Callable

from pydantic_core import PydanticSerializationError, to_json

from logaspect.exceptions import SerializationFailure

# Containers whose items are checked for one-shot iterators before encoding
_CONTAINER_TYPES = (list, tuple, set, frozenset, dict)


def _find_iterator(value: Any) -> Any | None:
    """Return the first one-shot iterator in value or its nested containers.

    Serializing an iterator consumes it, so the caller would receive it
    exhausted. Generators, map/filter objects and open files all count.
    """
    stack = [value]
    seen: set[int] = set()
    while stack:
        item = stack.pop()
        if isinstance(item, Iterator):
            return item
        if isinstance(item, _CONTAINER_TYPES):
            if id(item) in seen:
                continue
            seen.add(id(item))
            stack.extend(item.values() if isinstance(item, dict) else item)
    return None


class JsonEncoder:
    """Renders arbitrary values as compact JSON text.

    Unknown types fail instead of being stringified, unless a fallback is
    configured. Circular references fail as well.
    """

    def __init__(
        self,
        *,
        fallback: Callable[[Any], Any] | None = None,
        by_alias: bool = True,
    ) -> None:
        """Initialize encoder.

        Args:
            fallback: Called with values the serializer does not know; its
                      return value is serialized instead. None means fail.
            by_alias: Use field aliases when serializing Pydantic models.
        """
        self._fallback = fallback
        self._by_alias = by_alias

    def encode(self, value: Any) -> str:
        """Serialize value to JSON text.

        Args:
            value: Value to serialize.

        Returns:
            str: Compact JSON text.

        Raises:
            SerializationFailure: If the value cannot be represented as JSON,
                or contains an iterator that encoding would exhaust.
        """
        iterator = _find_iterator(value)
        if iterator is not None:
            raise SerializationFailure(f"cannot encode one-shot iterator {type(iterator).__name__} without consuming it")
        try:
            return to_json(value, by_alias=self._by_alias, fallback=self._fallback).decode("utf-8")
        except (PydanticSerializationError, ValueError, TypeError, RecursionError) as e:
            failure = SerializationFailure(f"{type(e).__name__}: {e}")
            raise failure from e


_default_encoder = JsonEncoder()


def get_default_encoder() -> JsonEncoder:
    """Get the shared encoder used when no other is configured.

    Returns:
        JsonEncoder: Module-level encoder without fallback.
    """
    return _default_encoder
