"""日志管理器 - 统一的日志配置和管理。

提供：
- 统一的日志配置
- 性能监控装饰器
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import wraps
import sys
import time
from typing import ParamSpec, TypeVar

from loguru import logger

# 移除默认配置，由setup_logging统一配置
logger.remove()

P = ParamSpec("P")
T = TypeVar("T")


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """设置日志配置。
    
    Args:
        log_level: 日志级别（默认：INFO）
        log_file: 日志文件路径（可选，未提供时只输出到控制台）
    """
    log_level = log_level.upper()
    
    # 控制台输出
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
    )
    
    # 文件输出
    if log_file:
        logger.add(
            log_file,
            rotation="00:00",
            retention="7 days",
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            encoding="utf-8",
            enqueue=True,  # 异步写入
        )
    
    logger.info(f"日志系统初始化完成，级别: {log_level}")


def log_performance(
    threshold: float = 1.0,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """性能监控装饰器。
    
    记录协程执行时间，超过阈值时警告。
    
    Args:
        threshold: 警告阈值（秒）
    
    使用示例:
        @log_performance(threshold=0.5)
        async def slow_operation():
            pass
    """
    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                duration = time.perf_counter() - start_time
                logger.error(
                    f"执行失败: {func.__module__}.{func.__qualname__} | "
                    f"耗时: {duration:.3f}s | "
                    f"异常: {type(exc).__name__}: {exc}"
                )
                raise
            
            duration = time.perf_counter() - start_time
            if duration > threshold:
                logger.warning(
                    f"性能警告: {func.__module__}.{func.__qualname__} 执行耗时 {duration:.3f}s "
                    f"(阈值: {threshold}s)"
                )
            else:
                logger.debug(
                    f"性能: {func.__module__}.{func.__qualname__} 执行耗时 {duration:.3f}s"
                )
            return result
        
        return wrapper
    return decorator


__all__ = [
    "logger",
    "log_performance",
    "setup_logging",
]
