from __future__ import annotations

import asyncio

import pytest

from aurimyth.atomic_kit.common import log_performance


@log_performance(threshold=0.0)
async def slow_operation() -> str:
    await asyncio.sleep(0.001)
    return "done"


@log_performance()
async def failing_operation() -> None:
    raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_slow_call_warns(log_messages) -> None:
    assert await slow_operation() == "done"

    assert any(level == "WARNING" and "slow_operation" in message for level, message in log_messages)


@pytest.mark.asyncio
async def test_failure_is_logged_and_reraised(log_messages) -> None:
    with pytest.raises(RuntimeError):
        await failing_operation()

    assert any(level == "ERROR" and "RuntimeError: boom" in message for level, message in log_messages)
