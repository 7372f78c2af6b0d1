"""冲突重试控制器。

状态机：Attempt(1..max_attempts) -> Success | Fatal

- 成功：返回结果
- RetryableConflictError 且未达上限：丢弃失败的事务，从头重新执行一次尝试
  （重新加锁定位，引发冲突的那一行此时通常已经可见）
- RetryableConflictError 且已达上限：原样抛出最后一次的异常
- 其他异常：立即抛出，不再尝试
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

from aurimyth.atomic_kit.common.logging import logger
from aurimyth.atomic_kit.config import UpsertSettings
from aurimyth.atomic_kit.domain.exceptions import RetryableConflictError

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"冲突重试: 第 {retry_state.attempt_number} 次尝试失败 | "
        f"{type(exc).__name__}: {exc}"
    )


class ConflictRetryController:
    """有界重试控制器。

    每次调用 run() 都使用独立的 AsyncRetrying 实例，可以安全地被并发任务共享。
    """

    def __init__(
        self,
        max_attempts: int = 3,
        *,
        backoff: float = 0.0,
        backoff_max: float = 1.0,
    ) -> None:
        """初始化重试控制器。

        Args:
            max_attempts: 最大尝试次数（包含首次）
            backoff: 指数退避基数（秒），0 表示立即重试
            backoff_max: 退避上限（秒）
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts 必须 >= 1，当前: {max_attempts}")
        self._max_attempts = max_attempts
        self._backoff = backoff
        self._backoff_max = backoff_max

    @classmethod
    def from_settings(cls, settings: UpsertSettings) -> ConflictRetryController:
        return cls(
            max_attempts=settings.max_attempts,
            backoff=settings.retry_backoff,
            backoff_max=settings.retry_backoff_max,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def _wait_strategy(self):
        if self._backoff <= 0:
            return wait_none()
        return wait_exponential(multiplier=self._backoff, max=self._backoff_max)

    async def run(self, attempt_fn: Callable[[], Awaitable[T]]) -> T:
        """执行 attempt_fn，遇到可重试冲突时重新执行。

        Args:
            attempt_fn: 完成一次完整事务性尝试的协程函数

        Returns:
            attempt_fn 的返回值

        Raises:
            RetryableConflictError: 重试耗尽，原样抛出最后一次的异常
            Exception: 不可重试的异常，立即抛出
        """
        attempt = 0

        async def _attempt() -> T:
            nonlocal attempt
            attempt += 1
            try:
                return await attempt_fn()
            except RetryableConflictError as exc:
                exc.attempts = attempt
                raise

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait_strategy(),
            retry=retry_if_exception_type(RetryableConflictError),
            before_sleep=_log_retry,
            reraise=True,
        )

        try:
            return await retrying(_attempt)
        except RetryableConflictError as exc:
            logger.warning(
                f"冲突重试耗尽: 共 {exc.attempts} 次尝试 | "
                f"{type(exc).__name__}: {exc}"
            )
            raise

    def __repr__(self) -> str:
        return f"<ConflictRetryController max_attempts={self._max_attempts}>"


__all__ = [
    "ConflictRetryController",
]
