"""原子 UPSERT 模块。

提供按身份属性"加锁定位 - 更新或创建"的原子操作，
包括软删除恢复与唯一约束冲突/死锁的有界重试。
"""

from .capabilities import (
    NOT_SOFT_DELETABLE,
    CapabilityRegistry,
    SoftDeleteCapability,
    get_capability_registry,
    mapped_attributes,
)
from .driver import IStoreDriver, IStoreTransaction, LocateQuery
from .engine import AtomicUpsertEngine, UpsertOutcome
from .locator import RowLocator
from .reconciler import SoftDeleteReconciler
from .retry import ConflictRetryController

__all__ = [
    "NOT_SOFT_DELETABLE",
    "AtomicUpsertEngine",
    "CapabilityRegistry",
    "ConflictRetryController",
    "IStoreDriver",
    "IStoreTransaction",
    "LocateQuery",
    "RowLocator",
    "SoftDeleteCapability",
    "SoftDeleteReconciler",
    "UpsertOutcome",
    "get_capability_registry",
    "mapped_attributes",
]
