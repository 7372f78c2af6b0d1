"""原子 UPSERT 引擎。

每次尝试都在一个独立事务中执行：
1. 查询模型的软删除能力
2. 加锁定位（支持软删除时包含已删除记录）
3. 命中：恢复软删除标记 -> 写入更新值 -> created=False
4. 未命中：插入 identity 与 values 的合并结果（values 优先）-> created=True

步骤 2 和 4 之间存在并发事务抢先插入的窗口，此时插入会触发唯一约束冲突，
由 ConflictRetryController 回滚并重新执行整次尝试，重新定位后走"命中"分支。

使用示例:
    engine = AtomicUpsertEngine(SQLAlchemyStoreDriver(session_factory))
    outcome = await engine.upsert(User, {"email": "a@example.com"}, {"name": "Alice"})
    user, created = outcome
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any, Generic

from aurimyth.atomic_kit.common.logging import log_performance, logger
from aurimyth.atomic_kit.config import UpsertSettings
from aurimyth.atomic_kit.domain.exceptions import UpsertArgumentError
from aurimyth.atomic_kit.domain.models import Base

from .capabilities import CapabilityRegistry, get_capability_registry, mapped_attributes
from .driver import IStoreDriver, ModelType
from .locator import RowLocator
from .reconciler import SoftDeleteReconciler
from .retry import ConflictRetryController


@dataclass(frozen=True)
class UpsertOutcome(Generic[ModelType]):
    """UPSERT 结果。

    Attributes:
        record: 最终的记录
        created: 是否为本次调用新插入
        restored: 是否从软删除状态恢复
    """

    record: ModelType
    created: bool
    restored: bool = False

    def __iter__(self) -> Iterator[Any]:
        yield self.record
        yield self.created


class AtomicUpsertEngine:
    """原子 UPSERT 引擎。"""

    def __init__(
        self,
        driver: IStoreDriver,
        *,
        registry: CapabilityRegistry | None = None,
        locator: RowLocator | None = None,
        reconciler: SoftDeleteReconciler | None = None,
        retry: ConflictRetryController | None = None,
        settings: UpsertSettings | None = None,
    ) -> None:
        """初始化引擎。

        Args:
            driver: 存储驱动
            registry: 能力注册表（默认使用进程级注册表）
            locator: 加锁定位器
            reconciler: 软删除恢复器
            retry: 重试控制器（默认按 settings 构建）
            settings: UPSERT 配置
        """
        self._driver = driver
        self._registry = registry or get_capability_registry()
        self._locator = locator or RowLocator(self._registry)
        self._reconciler = reconciler or SoftDeleteReconciler()
        self._retry = retry or ConflictRetryController.from_settings(settings or UpsertSettings())

    @property
    def driver(self) -> IStoreDriver:
        return self._driver

    @log_performance(threshold=1.0)
    async def upsert(
        self,
        model_class: type[ModelType],
        identity: Mapping[str, Any],
        values: Mapping[str, Any] | None = None,
    ) -> UpsertOutcome[ModelType]:
        """按身份属性更新或创建记录。

        Args:
            model_class: 模型类
            identity: 身份属性（查找条件，创建时写入）
            values: 更新值（无论新建还是已存在都会写入）

        Returns:
            UpsertOutcome: 记录及是否新建

        Raises:
            UpsertArgumentError: 参数不合法
            RetryableConflictError: 重试耗尽，最后一次的原始冲突
            FatalStoreError: 不可重试的存储错误
        """
        identity = dict(identity)
        values = dict(values or {})
        self._validate(model_class, identity, values)
        return await self._retry.run(partial(self._attempt, model_class, identity, values))

    def _validate(
        self,
        model_class: type[Base],
        identity: dict[str, Any],
        values: dict[str, Any],
    ) -> None:
        if not identity:
            raise UpsertArgumentError("身份属性不能为空")

        unknown = sorted((identity.keys() | values.keys()) - mapped_attributes(model_class))
        if unknown:
            raise UpsertArgumentError(
                f"模型 {model_class.__name__} 没有字段: {', '.join(unknown)}",
                metadata={"fields": unknown},
            )

    async def _attempt(
        self,
        model_class: type[ModelType],
        identity: dict[str, Any],
        values: dict[str, Any],
    ) -> UpsertOutcome[ModelType]:
        capability = self._registry.capability(model_class)

        async with self._driver.transaction() as tx:
            record = await self._locator.locate(
                tx,
                model_class,
                identity,
                include_soft_deleted=capability.supported,
            )
            if record is not None:
                restored = self._reconciler.reconcile(record, capability)
                record = await tx.update(record, values)
                outcome = UpsertOutcome(record=record, created=False, restored=restored)
            else:
                record = await tx.insert(model_class, {**identity, **values})
                outcome = UpsertOutcome(record=record, created=True)

        logger.debug(
            f"UPSERT {model_class.__name__} {identity}: "
            f"created={outcome.created} restored={outcome.restored}"
        )
        return outcome

    def __repr__(self) -> str:
        return f"<AtomicUpsertEngine driver={self._driver.__class__.__name__}>"


__all__ = [
    "AtomicUpsertEngine",
    "UpsertOutcome",
]
