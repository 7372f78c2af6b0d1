"""功能 Mixins (按需组合)。

软删除有两种标记方案，都通过 SoftDeletable 声明能力：
- SoftDeleteMixin: deleted_at 可空时间戳，NULL = 未删除
- AuditableStateMixin: deleted_at 整数时间戳，0 = 未删除（适配 MySQL 唯一索引）

注意：只有声明了 SoftDeletable 的模型才被视为支持软删除，
仅仅拥有一个名为 deleted_at 的列并不够。
"""

from __future__ import annotations

from datetime import UTC, datetime
import time
import uuid

from sqlalchemy import BigInteger, DateTime, Integer, func, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Uuid as SQLAlchemyUuid


class IDMixin:
    """标准自增主键 Mixin"""

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        sort_order=-1,  # 确保 ID 在 DDL 中排在前面
        comment="主键ID",
    )


class UUIDMixin:
    """UUID 主键 Mixin"""

    id: Mapped[uuid.UUID] = mapped_column(
        SQLAlchemyUuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        sort_order=-1,
        comment="UUID主键",
    )


class TimestampMixin:
    """创建/更新时间 Mixin"""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        sort_order=99,
        comment="创建时间",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        sort_order=99,
        comment="更新时间",
    )


class SoftDeletable:
    """软删除能力声明。

    子类通过类属性声明删除标记列及其"未删除"取值；
    删除时写入的取值由具体 Mixin 的 mark_deleted() 决定。
    """

    __deleted_marker__ = "deleted_at"
    __live_marker_value__ = None

    @property
    def is_deleted(self) -> bool:
        """判断是否已删除。"""
        return getattr(self, self.__deleted_marker__) != self.__live_marker_value__

    def restore(self) -> None:
        """恢复数据。"""
        setattr(self, self.__deleted_marker__, self.__live_marker_value__)


class SoftDeleteMixin(SoftDeletable):
    """可空时间戳软删除 Mixin

    - deleted_at IS NULL: 未删除
    - deleted_at 非空: 删除时间
    """

    __live_marker_value__ = None

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        index=True,
        comment="删除时间(NULL=未删)",
    )

    def mark_deleted(self) -> None:
        self.deleted_at = datetime.now(UTC)


class AuditableStateMixin(SoftDeletable):
    """可审计状态 Mixin (软删除 '默认 0' 策略)

    - deleted_at = 0: 未删除
    - deleted_at > 0: 已删除 (Unix 时间戳)

    支持 MySQL 唯一索引 UNIQUE(email, deleted_at)，此时同一身份可能存在
    多条已删除记录，定位时优先返回未删除的那一条。
    """

    __live_marker_value__ = 0

    deleted_at: Mapped[int] = mapped_column(
        BigInteger,
        default=0,
        server_default=text("0"),
        nullable=False,
        index=True,
        comment="删除时间戳(0=未删)",
    )

    def mark_deleted(self) -> None:
        self.deleted_at = int(time.time())


__all__ = [
    "AuditableStateMixin",
    "IDMixin",
    "SoftDeletable",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
]
