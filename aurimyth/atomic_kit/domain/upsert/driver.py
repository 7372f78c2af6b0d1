"""存储驱动接口。

UPSERT 引擎只依赖这里定义的抽象：
- IStoreDriver.transaction(): 开启一个事务，正常退出时提交，异常时回滚
- IStoreTransaction: 事务内的加锁读取、插入、更新

驱动必须把唯一约束冲突和死锁转换为 UniqueConstraintViolationError、
DeadlockDetectedError、SerializationFailureError，其余存储错误转换为 FatalStoreError 的子类。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from aurimyth.atomic_kit.domain.models import Base

from .capabilities import SoftDeleteCapability

ModelType = TypeVar("ModelType", bound=Base)


@dataclass(frozen=True)
class LocateQuery(Generic[ModelType]):
    """加锁定位查询。

    对 identity 的每个键做等值匹配（None 按 IS NULL 处理）。
    """

    model_class: type[ModelType]
    identity: Mapping[str, Any]
    capability: SoftDeleteCapability
    include_soft_deleted: bool

    @property
    def excludes_soft_deleted(self) -> bool:
        return self.capability.supported and not self.include_soft_deleted

    def matches(self, values: Mapping[str, Any]) -> bool:
        """判断一行数据（字段名 -> 值）是否满足查询条件。"""
        for key, expected in self.identity.items():
            if values.get(key) != expected:
                return False
        if self.excludes_soft_deleted:
            return self.capability.is_live(values.get(self.capability.column))
        return True


class IStoreTransaction(ABC):
    """事务内操作接口。"""

    @abstractmethod
    async def locking_read(self, query: LocateQuery[ModelType]) -> ModelType | None:
        """加锁读取。

        在事务结束前持有匹配行的写意向锁，同一行的并发加锁读取会阻塞。
        """

    @abstractmethod
    async def insert(self, model_class: type[ModelType], fields: Mapping[str, Any]) -> ModelType:
        """插入新行，违反唯一约束时抛出 UniqueConstraintViolationError。"""

    @abstractmethod
    async def update(self, record: ModelType, values: Mapping[str, Any]) -> ModelType:
        """将 values 写入记录，并持久化记录上已有的修改。"""


class IStoreDriver(ABC):
    """存储驱动接口。"""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[IStoreTransaction]:
        """开启事务（至少 READ COMMITTED 隔离级别）。"""


__all__ = [
    "IStoreDriver",
    "IStoreTransaction",
    "LocateQuery",
    "ModelType",
]
