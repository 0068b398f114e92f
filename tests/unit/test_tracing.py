"""Tests for the traced decorator (no tracer provider configured)."""

import pytest

from objectsearch.shared.telemetry.tracing import get_trace_id, traced


@traced("test.sync")
def _double(value: int) -> int:
    return value * 2


@traced()
async def _fail() -> None:
    raise LookupError("boom")


def test_sync_function_result_is_returned() -> None:
    assert _double(21) == 42


async def test_async_exception_is_reraised() -> None:
    with pytest.raises(LookupError, match="boom"):
        await _fail()


def test_trace_id_outside_span() -> None:
    assert get_trace_id() is None
