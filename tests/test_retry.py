"""
Tests for the bounded retry policy.
"""

import pytest

from restaurant_finder.errors import RetryExhaustedError
from restaurant_finder.retry import RetryPolicy


@pytest.mark.asyncio
async def test_returns_first_success():
    attempts = []

    async def operation(attempt):
        attempts.append(attempt)
        if attempt < 3:
            raise RuntimeError(f"boom {attempt}")
        return "done"

    assert await RetryPolicy(max_attempts=3).run(operation) == "done"
    assert attempts == [1, 2, 3]


@pytest.mark.asyncio
async def test_exhaustion_carries_last_error():
    attempts = []

    async def operation(attempt):
        attempts.append(attempt)
        raise RuntimeError(f"boom {attempt}")

    with pytest.raises(RetryExhaustedError) as exc_info:
        await RetryPolicy(max_attempts=3).run(operation)

    assert attempts == [1, 2, 3]
    assert exc_info.value.attempts == 3
    assert str(exc_info.value.last_error) == "boom 3"


@pytest.mark.asyncio
async def test_unlisted_exceptions_propagate_immediately():
    attempts = []

    async def operation(attempt):
        attempts.append(attempt)
        raise KeyError("not retried")

    with pytest.raises(KeyError):
        await RetryPolicy(max_attempts=3, retry_on=(RuntimeError,)).run(operation)
    assert attempts == [1]


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
