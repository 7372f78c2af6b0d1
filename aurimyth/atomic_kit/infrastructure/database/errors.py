"""数据库异常分类。

把 SQLAlchemy/DBAPI 异常转换为领域存储异常：
- 唯一约束冲突: PostgreSQL 23505 / MySQL 1062 / SQLite UNIQUE、PRIMARYKEY 约束
- 死锁: PostgreSQL 40P01 / MySQL 1213
- 串行化失败: SQLSTATE 40001（REPEATABLE READ / SERIALIZABLE 下的并发更新）
- 其他 IntegrityError: ConstraintViolationError
- 其他 DBAPIError: FatalStoreError
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import DBAPIError, IntegrityError

from aurimyth.atomic_kit.domain.exceptions import (
    ConstraintViolationError,
    DeadlockDetectedError,
    FatalStoreError,
    SerializationFailureError,
    StoreError,
    UniqueConstraintViolationError,
)

_PG_UNIQUE_VIOLATION = "23505"
_PG_DEADLOCK_DETECTED = "40P01"
_SERIALIZATION_FAILURE = "40001"
_MYSQL_DUPLICATE_ENTRY = 1062
_MYSQL_DEADLOCK = 1213
_SQLITE_UNIQUE_ERRORS = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


def _sqlstate(orig: Any) -> str | None:
    # asyncpg 适配层把原始异常挂在 __cause__ 上
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        for attr in ("sqlstate", "pgcode"):
            value = getattr(candidate, attr, None)
            if value:
                return str(value)
    return None


def _mysql_errno(orig: Any) -> int | None:
    args = getattr(orig, "args", None) or ()
    if args and isinstance(args[0], int):
        return args[0]
    return None


def is_unique_violation(exc: DBAPIError) -> bool:
    """是否为唯一约束冲突。"""
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    if _sqlstate(orig) == _PG_UNIQUE_VIOLATION:
        return True
    if _mysql_errno(orig) == _MYSQL_DUPLICATE_ENTRY:
        return True
    if getattr(orig, "sqlite_errorname", None) in _SQLITE_UNIQUE_ERRORS:
        return True
    return "UNIQUE constraint failed" in str(orig)


def is_deadlock(exc: DBAPIError) -> bool:
    """是否为数据库检测到的死锁。"""
    orig = exc.orig
    return _sqlstate(orig) == _PG_DEADLOCK_DETECTED or _mysql_errno(orig) == _MYSQL_DEADLOCK


def is_serialization_failure(exc: DBAPIError) -> bool:
    """是否为串行化失败。"""
    return _sqlstate(exc.orig) == _SERIALIZATION_FAILURE


def translate_db_error(exc: DBAPIError) -> StoreError:
    """将 DBAPI 异常转换为领域存储异常（原始异常保存在 orig 上）。"""
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    if is_deadlock(exc):
        return DeadlockDetectedError(f"检测到死锁: {detail}", orig=exc)
    if is_serialization_failure(exc):
        return SerializationFailureError(f"事务无法串行化: {detail}", orig=exc)
    if is_unique_violation(exc):
        return UniqueConstraintViolationError(f"唯一约束冲突: {detail}", orig=exc)
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError(f"约束冲突: {detail}", orig=exc)
    return FatalStoreError(f"数据库错误: {detail}", orig=exc)


@contextmanager
def translate_errors() -> Iterator[None]:
    """在上下文中把 DBAPIError 转换为领域存储异常。"""
    try:
        yield
    except DBAPIError as exc:
        raise translate_db_error(exc) from exc


__all__ = [
    "is_deadlock",
    "is_serialization_failure",
    "is_unique_violation",
    "translate_db_error",
    "translate_errors",
]
