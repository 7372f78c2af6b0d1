"""模型能力注册表。

按模型类缓存"是否支持软删除"的判断结果。能力是模型类的静态属性，
进程内只计算一次，之后不再重新评估。

并发首次计算可能重复执行，但结果相同，写入使用 dict.setdefault，
所有调用方最终拿到同一个缓存对象。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import inspect as sa_inspect

from aurimyth.atomic_kit.common.logging import logger
from aurimyth.atomic_kit.domain.exceptions import UpsertArgumentError
from aurimyth.atomic_kit.domain.models import SoftDeletable


@dataclass(frozen=True, slots=True)
class SoftDeleteCapability:
    """软删除能力描述。

    Attributes:
        supported: 是否支持软删除
        column: 删除标记字段名
        live_value: "未删除"时标记字段的取值（NULL 方案为 None，整数方案为 0）
    """

    supported: bool
    column: str | None = None
    live_value: Any = None

    def is_live(self, marker: Any) -> bool:
        return marker == self.live_value


NOT_SOFT_DELETABLE = SoftDeleteCapability(supported=False)


def mapped_attributes(model_class: type) -> frozenset[str]:
    """返回模型类所有列映射属性名。"""
    mapper = sa_inspect(model_class, raiseerr=False)
    if mapper is None:
        raise UpsertArgumentError(f"{model_class!r} 不是 SQLAlchemy 映射模型")
    return frozenset(attr.key for attr in mapper.column_attrs)


def _inspect_capability(model_class: type) -> SoftDeleteCapability:
    if not issubclass(model_class, SoftDeletable):
        return NOT_SOFT_DELETABLE

    column = model_class.__deleted_marker__
    if column not in mapped_attributes(model_class):
        raise TypeError(f"模型 {model_class.__name__} 声明了软删除，但没有映射字段 {column!r}")
    return SoftDeleteCapability(
        supported=True,
        column=column,
        live_value=model_class.__live_marker_value__,
    )


class CapabilityRegistry:
    """按模型类记忆化的软删除能力表。"""

    def __init__(self) -> None:
        self._cache: dict[type, SoftDeleteCapability] = {}

    def capability(self, model_class: type) -> SoftDeleteCapability:
        cached = self._cache.get(model_class)
        if cached is not None:
            return cached

        computed = _inspect_capability(model_class)
        logger.debug(f"模型能力: {model_class.__name__} soft_delete={computed.supported}")
        return self._cache.setdefault(model_class, computed)

    def supports_soft_delete(self, model_class: type) -> bool:
        return self.capability(model_class).supported

    def clear(self) -> None:
        """清空缓存（仅用于测试）。"""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"<CapabilityRegistry cached={len(self._cache)}>"


_default_registry = CapabilityRegistry()


def get_capability_registry() -> CapabilityRegistry:
    """获取进程级默认注册表。"""
    return _default_registry


__all__ = [
    "NOT_SOFT_DELETABLE",
    "CapabilityRegistry",
    "SoftDeleteCapability",
    "get_capability_registry",
    "mapped_attributes",
]
