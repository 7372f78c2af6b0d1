"""Domain 层异常定义。

存储异常分为两类：
- RetryableConflictError: 唯一约束冲突、死锁、串行化失败，由重试控制器在本地处理
- FatalStoreError: 其他存储错误，立即向调用方传播

重试耗尽时抛出的是最后一次尝试的原始异常，而不是包装异常，
调用方已有的冲突处理代码可以直接复用。
"""

from __future__ import annotations

from typing import Any

from aurimyth.atomic_kit.common.codes import ErrorCode
from aurimyth.atomic_kit.common.exceptions import FoundationError


class UpsertArgumentError(FoundationError, ValueError):
    """UPSERT 参数错误（身份属性为空、字段未映射等），不会重试。"""

    code = ErrorCode.VALIDATION_ERROR


class StoreError(FoundationError):
    """存储层异常基类。

    Attributes:
        orig: 驱动层原始异常（如果有）
    """

    code = ErrorCode.DATABASE_ERROR

    def __init__(
        self,
        message: str = "存储操作失败",
        *args: object,
        orig: BaseException | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, *args, metadata=metadata)
        self.orig = orig


class RetryableConflictError(StoreError):
    """可重试的冲突。

    Attributes:
        attempts: 抛出该异常时已经进行的尝试次数
    """

    attempts: int = 1


class UniqueConstraintViolationError(RetryableConflictError):
    """唯一约束冲突。"""

    code = ErrorCode.DUPLICATE_KEY

    def __init__(self, message: str = "唯一约束冲突", *args: object, **kwargs: Any) -> None:
        super().__init__(message, *args, **kwargs)


class DeadlockDetectedError(RetryableConflictError):
    """数据库检测到死锁并中止了当前事务。"""

    code = ErrorCode.DEADLOCK

    def __init__(self, message: str = "检测到死锁", *args: object, **kwargs: Any) -> None:
        super().__init__(message, *args, **kwargs)


class SerializationFailureError(RetryableConflictError):
    """并发更新导致事务无法串行化（REPEATABLE READ / SERIALIZABLE 隔离级别下）。"""

    code = ErrorCode.SERIALIZATION_FAILURE

    def __init__(self, message: str = "事务无法串行化", *args: object, **kwargs: Any) -> None:
        super().__init__(message, *args, **kwargs)


class FatalStoreError(StoreError):
    """不可重试的存储错误（连接、超时、结构错误等）。"""


class ConstraintViolationError(FatalStoreError):
    """与身份唯一性无关的约束冲突（外键、非空、检查约束）。"""

    code = ErrorCode.CONSTRAINT_VIOLATION

    def __init__(self, message: str = "约束冲突", *args: object, **kwargs: Any) -> None:
        super().__init__(message, *args, **kwargs)


__all__ = [
    "ConstraintViolationError",
    "DeadlockDetectedError",
    "FatalStoreError",
    "RetryableConflictError",
    "SerializationFailureError",
    "StoreError",
    "UniqueConstraintViolationError",
    "UpsertArgumentError",
]
