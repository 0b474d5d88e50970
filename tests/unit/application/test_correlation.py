"""Unit tests for correlation id handling."""

from collections.abc import Iterator
from uuid import UUID

import pytest

from ringside.application.services.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clear_correlation_id() -> Iterator[None]:
    yield
    set_correlation_id("")


class TestCorrelationId:
    """Tests for the context-held id."""

    def test_default_is_empty(self) -> None:
        assert get_correlation_id() == ""

    def test_set_and_get(self) -> None:
        set_correlation_id("abc")
        assert get_correlation_id() == "abc"

    def test_generated_ids_are_uuid4(self) -> None:
        first, second = generate_correlation_id(), generate_correlation_id()
        assert UUID(first).version == 4
        assert first != second


class TestCorrelationProcessor:
    """Tests for the structlog processor."""

    def test_adds_context_id(self) -> None:
        set_correlation_id("abc")
        assert correlation_id_processor(None, "info", {"event": "x"}) == {
            "event": "x",
            "correlation_id": "abc",
        }

    def test_bound_id_wins(self) -> None:
        set_correlation_id("abc")
        event = {"event": "x", "correlation_id": "bound"}
        assert correlation_id_processor(None, "info", event)["correlation_id"] == "bound"

    def test_no_id_no_key(self) -> None:
        assert correlation_id_processor(None, "info", {"event": "x"}) == {"event": "x"}
