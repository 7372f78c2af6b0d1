"""加锁定位。

按身份属性查找记录，并在当前事务结束前持有该行的写意向锁，
相同身份属性的并发定位会被阻塞直到持锁事务提交或回滚。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, and_, case, select
from sqlalchemy import inspect as sa_inspect

from aurimyth.atomic_kit.common.logging import logger
from aurimyth.atomic_kit.domain.exceptions import UpsertArgumentError

from .capabilities import CapabilityRegistry, get_capability_registry
from .driver import IStoreTransaction, LocateQuery, ModelType


def _equals(column: Any, value: Any) -> Any:
    if value is None:
        return column.is_(None)
    return column == value


class RowLocator:
    """加锁定位器。"""

    def __init__(self, registry: CapabilityRegistry | None = None) -> None:
        self._registry = registry or get_capability_registry()

    def build_query(
        self,
        model_class: type[ModelType],
        identity: Mapping[str, Any],
        include_soft_deleted: bool,
    ) -> LocateQuery[ModelType]:
        if not identity:
            raise UpsertArgumentError("身份属性不能为空")
        return LocateQuery(
            model_class=model_class,
            identity=dict(identity),
            capability=self._registry.capability(model_class),
            include_soft_deleted=include_soft_deleted,
        )

    async def locate(
        self,
        tx: IStoreTransaction,
        model_class: type[ModelType],
        identity: Mapping[str, Any],
        include_soft_deleted: bool,
    ) -> ModelType | None:
        """加锁查找匹配 identity 的记录。

        Args:
            tx: 当前事务
            model_class: 模型类
            identity: 身份属性（至少一个）
            include_soft_deleted: 是否包含已软删除的记录（模型不支持软删除时无效）

        Returns:
            匹配的记录，不存在时返回 None
        """
        query = self.build_query(model_class, identity, include_soft_deleted)
        record = await tx.locking_read(query)
        logger.debug(
            f"加锁定位 {model_class.__name__} {dict(identity)}: "
            f"{'命中' if record is not None else '未命中'}"
        )
        return record

    @staticmethod
    def build_statement(query: LocateQuery) -> Select:
        """将定位查询编译为 SELECT ... FOR UPDATE。

        包含软删除记录时，未删除的记录排在前面，其次按主键排序。
        """
        model_class = query.model_class
        conditions = [
            _equals(getattr(model_class, key), value)
            for key, value in query.identity.items()
        ]
        statement = select(model_class).where(and_(*conditions))

        capability = query.capability
        if capability.supported:
            live = _equals(getattr(model_class, capability.column), capability.live_value)
            if query.excludes_soft_deleted:
                statement = statement.where(live)
            else:
                statement = statement.order_by(case((live, 0), else_=1))

        statement = statement.order_by(*sa_inspect(model_class).primary_key)
        return statement.limit(1).with_for_update()


__all__ = [
    "RowLocator",
]
