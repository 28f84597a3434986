"""Unit tests for JsonEncoder.

Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import pytest
from pydantic import BaseModel

from logaspect.exceptions import SerializationFailure
from logaspect.serialization import JsonEncoder, get_default_encoder


class Color(str, Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class User(BaseModel):
    name: str
    tags: list[str] = []


class Opaque:
    pass


class TestJsonEncoder:
    """Tests for JsonEncoder.encode."""

    @pytest.mark.parametrize(
        "make_value",
        [
            lambda: (n for n in range(3)),
            lambda: map(str, [1, 2]),
            lambda: [1, iter([2])],
            lambda: {"nested": (1, {"deep": iter("ab")})},
        ],
        ids=["generator", "map", "list_item", "dict_value"],
    )
    def test_rejects_one_shot_iterators(self, make_value):
        """Iterators fail even with a fallback, since encoding would drain them."""
        # Arrange
        encoder = JsonEncoder(fallback=repr)

        # Act / Assert
        with pytest.raises(SerializationFailure, match="one-shot iterator"):
            encoder.encode(make_value())

    def test_reiterable_containers_still_encode(self):
        """Re-iterable containers are not mistaken for iterators."""
        assert get_default_encoder().encode([(1, 2), {"a": [3]}]) == '[[1,2],{"a":[3]}]'

    @pytest.mark.parametrize(
        "value,expected",
        [
            (["Ada"], '["Ada"]'),
            ("Hello, Ada", '"Hello, Ada"'),
            (None, "null"),
            ({"a": 1, "b": [True, None]}, '{"a":1,"b":[true,null]}'),
            ((1, 2), "[1,2]"),
            (Color.RED, '"red"'),
            (Point(1, 2), '{"x":1,"y":2}'),
            (User(name="ada", tags=["admin"]), '{"name":"ada","tags":["admin"]}'),
            (datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc), '"2025-01-02T03:04:05Z"'),
        ],
    )
    def test_encodes_supported_values(self, value: Any, expected: str):
        """Supported values render as compact JSON."""
        # Act
        result = get_default_encoder().encode(value)

        # Assert
        assert result == expected

    def test_unknown_type_fails(self):
        """Values without a serialization rule raise SerializationFailure."""
        # Act
        with pytest.raises(SerializationFailure) as exc_info:
            JsonEncoder().encode([Opaque()])

        # Assert
        assert exc_info.value.phase is None
        assert exc_info.value.__cause__ is not None

    def test_circular_reference_fails(self):
        """Self-referencing structures raise SerializationFailure."""
        # Arrange
        data: dict[str, Any] = {}
        data["self"] = data

        # Act / Assert
        with pytest.raises(SerializationFailure):
            JsonEncoder().encode(data)

    def test_fallback_used_for_unknown_types(self):
        """A configured fallback renders unknown values."""
        # Arrange
        encoder = JsonEncoder(fallback=lambda obj: f"<{type(obj).__name__}>")

        # Act
        result = encoder.encode([Opaque()])

        # Assert
        assert result == '["<Opaque>"]'

    def test_failure_with_context(self):
        """with_context annotates phase and label and keeps the cause."""
        # Arrange
        try:
            JsonEncoder().encode(Opaque())
        except SerializationFailure as e:
            original = e

        # Act
        annotated = original.with_context("result", "Greeter.greet: ")

        # Assert
        assert annotated.phase == "result"
        assert annotated.label == "Greeter.greet: "
        assert str(annotated).startswith("Greeter.greet: failed to serialize result: ")
        assert annotated.__cause__ is original.__cause__
