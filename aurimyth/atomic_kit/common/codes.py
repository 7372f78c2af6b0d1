"""错误代码定义。

提供统一的错误代码枚举。
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举。"""
    
    # 通用错误 (1xxx)
    UNKNOWN_ERROR = "1000"
    VALIDATION_ERROR = "1001"
    
    # 数据库错误 (2xxx)
    DATABASE_ERROR = "2000"
    DUPLICATE_KEY = "2001"
    CONSTRAINT_VIOLATION = "2002"
    DEADLOCK = "2004"
    SERIALIZATION_FAILURE = "2005"


__all__ = [
    "ErrorCode",
]
