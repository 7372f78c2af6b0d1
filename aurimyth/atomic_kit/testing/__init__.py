"""测试工具模块。

提供不依赖真实数据库的存储驱动，用于验证并发与重试行为。
"""

from .memory import InMemoryStoreDriver, InMemoryStoreTransaction

__all__ = [
    "InMemoryStoreDriver",
    "InMemoryStoreTransaction",
]
