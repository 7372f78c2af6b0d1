"""基础异常定义。

整个工具包的异常基类，各层异常均继承自 FoundationError。
"""

from __future__ import annotations

from typing import Any

from .codes import ErrorCode


class FoundationError(Exception):
    """工具包异常基类。
    
    Attributes:
        message: 错误消息
        code: 错误代码
        metadata: 附加信息（用于日志）
    """
    
    code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    
    def __init__(
        self,
        message: str = "",
        *args: object,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, *args)
        self.message = message
        self.metadata = metadata or {}
    
    def __str__(self) -> str:
        return self.message
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} code={self.code.value} message={self.message}>"


__all__ = [
    "FoundationError",
]
