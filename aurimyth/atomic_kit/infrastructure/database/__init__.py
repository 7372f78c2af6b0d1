"""数据库模块。

提供 SQLAlchemy 存储驱动和数据库异常分类。
"""

from .driver import SQLAlchemyStoreDriver, SQLAlchemyStoreTransaction
from .errors import (
    is_deadlock,
    is_serialization_failure,
    is_unique_violation,
    translate_db_error,
    translate_errors,
)

__all__ = [
    "SQLAlchemyStoreDriver",
    "SQLAlchemyStoreTransaction",
    # 异常分类
    "is_deadlock",
    "is_serialization_failure",
    "is_unique_violation",
    "translate_db_error",
    "translate_errors",
]
