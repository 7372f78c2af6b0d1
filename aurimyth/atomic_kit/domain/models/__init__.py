"""领域模型模块。

提供 ORM 模型基类、Mixin 和常用组合模型。
"""

from .base import Base
from .mixins import (
    AuditableStateMixin,
    IDMixin,
    SoftDeletable,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
)
from .models import (
    AuditableStateModel,
    Model,
    SoftDeleteModel,
    UUIDAuditableStateModel,
    UUIDModel,
)

__all__ = [
    # 基类
    "Base",
    # Mixins
    "AuditableStateMixin",
    "IDMixin",
    "SoftDeletable",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
    # 组合模型
    "AuditableStateModel",
    "Model",
    "SoftDeleteModel",
    "UUIDAuditableStateModel",
    "UUIDModel",
]
