"""服务层模块。"""

from .base import UpsertService

__all__ = [
    "UpsertService",
]
