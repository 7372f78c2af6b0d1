"""基础设施层模块。

提供外部依赖的实现：
- 数据库存储驱动
"""

from .database import SQLAlchemyStoreDriver

__all__ = [
    "SQLAlchemyStoreDriver",
]
