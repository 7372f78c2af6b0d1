"""UPSERT 服务基类。

生命周期钩子显式地包在 UPSERT 调用外面，而不是作为 ORM 事件隐式触发：
_before_upsert -> AtomicUpsertEngine.upsert -> _after_upsert
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from aurimyth.atomic_kit.common.logging import logger
from aurimyth.atomic_kit.domain.models import Base
from aurimyth.atomic_kit.domain.upsert import AtomicUpsertEngine, UpsertOutcome
from aurimyth.atomic_kit.domain.upsert.driver import ModelType


class UpsertService:
    """UPSERT 服务基类。

    使用示例:
        class UserService(UpsertService):
            async def _before_upsert(self, model_class, identity, values):
                return {**values, "email": identity["email"].lower()}

            async def _after_upsert(self, outcome):
                if outcome.created:
                    await send_welcome_mail(outcome.record)

        service = UserService(engine)
        user, created = await service.update_or_create(User, {"email": "a@example.com"}, {"name": "A"})
    """

    def __init__(self, engine: AtomicUpsertEngine) -> None:
        self._engine = engine
        logger.debug(f"初始化 {self.__class__.__name__}")

    @property
    def engine(self) -> AtomicUpsertEngine:
        return self._engine

    async def update_or_create(
        self,
        model_class: type[ModelType],
        identity: Mapping[str, Any],
        values: Mapping[str, Any] | None = None,
    ) -> UpsertOutcome[ModelType]:
        prepared = await self._before_upsert(model_class, identity, dict(values or {}))
        outcome = await self._engine.upsert(model_class, identity, prepared)
        await self._after_upsert(outcome)
        return outcome

    async def _before_upsert(
        self,
        model_class: type[Base],
        identity: Mapping[str, Any],
        values: dict[str, Any],
    ) -> dict[str, Any]:
        """UPSERT 前的钩子（子类可重写）。

        Args:
            model_class: 模型类
            identity: 身份属性
            values: 更新值

        Returns:
            dict: 实际写入的更新值
        """
        return values

    async def _after_upsert(self, outcome: UpsertOutcome) -> None:
        """UPSERT 提交后的钩子（子类可重写）。

        Args:
            outcome: UPSERT 结果
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} engine={self._engine!r}>"


__all__ = ["UpsertService"]
