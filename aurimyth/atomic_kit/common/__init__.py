"""Common 层模块。

最基础层，提供：
- 异常基类与错误代码
- 日志系统
"""

from .codes import ErrorCode
from .exceptions import FoundationError
from .logging import log_performance, logger, setup_logging

__all__ = [
    # 异常
    "ErrorCode",
    "FoundationError",
    # 日志
    "log_performance",
    "logger",
    "setup_logging",
]
