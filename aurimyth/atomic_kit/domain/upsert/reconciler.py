"""软删除恢复。"""

from __future__ import annotations

from typing import Any

from aurimyth.atomic_kit.common.logging import logger

from .capabilities import SoftDeleteCapability


class SoftDeleteReconciler:
    """清除已定位记录的删除标记。

    必须在写入更新值之前调用，这样 values 中显式给出的删除标记不会被覆盖。
    """

    def reconcile(self, record: Any, capability: SoftDeleteCapability) -> bool:
        """恢复已软删除的记录（原地修改，委托给 SoftDeletable.restore）。

        Returns:
            bool: 记录是否被恢复
        """
        if not capability.supported:
            return False

        marker = getattr(record, capability.column)
        if capability.is_live(marker):
            return False

        record.restore()
        logger.info(f"恢复软删除记录: {record!r} ({capability.column}={marker!r})")
        return True


__all__ = [
    "SoftDeleteReconciler",
]
