"""常用组合模型。

提供预定义的模型组合，方便直接使用。
"""

from __future__ import annotations

from .base import Base
from .mixins import (
    AuditableStateMixin,
    IDMixin,
    SoftDeleteMixin,
    TimestampMixin,
    UUIDMixin,
)


class Model(IDMixin, TimestampMixin, Base):
    """【常用】标准整数主键模型"""

    __abstract__ = True


class SoftDeleteModel(IDMixin, TimestampMixin, SoftDeleteMixin, Base):
    """【常用】可空时间戳软删除模型（整数主键 + 时间戳 + 软删除）"""

    __abstract__ = True


class AuditableStateModel(IDMixin, TimestampMixin, AuditableStateMixin, Base):
    """【常用】带可审计状态的标准模型（整数主键 + 时间戳 + 软删除）"""

    __abstract__ = True


class UUIDModel(UUIDMixin, TimestampMixin, Base):
    """【常用】UUID 主键模型"""

    __abstract__ = True


class UUIDAuditableStateModel(UUIDMixin, TimestampMixin, AuditableStateMixin, Base):
    """【常用】带可审计状态的 UUID 主键模型"""

    __abstract__ = True


__all__ = [
    "AuditableStateModel",
    "Model",
    "SoftDeleteModel",
    "UUIDAuditableStateModel",
    "UUIDModel",
]
