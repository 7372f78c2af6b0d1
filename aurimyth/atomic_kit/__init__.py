"""AuriMyth Atomic Kit - 原子 UPSERT 工具包。

按身份属性"加锁定位 - 更新或创建"，保证并发下同一身份只存在一条有效记录，
自动恢复软删除记录，并对唯一约束冲突和死锁进行有界重试。

模块结构：
- common: 最基础层（异常基类、日志系统）
- config: 配置（数据库、UPSERT、日志）
- domain: 领域层（模型 Mixin、存储驱动接口、UPSERT 协议）
- infrastructure: 基础设施层（SQLAlchemy 存储驱动）
- services: 服务层（带生命周期钩子的 UPSERT 服务）
- testing: 测试工具（内存存储驱动）
- bootstrap: 按配置创建引擎
"""

from . import common, config, domain, infrastructure, services, testing
from .domain.exceptions import (
    ConstraintViolationError,
    DeadlockDetectedError,
    FatalStoreError,
    RetryableConflictError,
    SerializationFailureError,
    StoreError,
    UniqueConstraintViolationError,
    UpsertArgumentError,
)
from .domain.upsert import AtomicUpsertEngine, UpsertOutcome
from .infrastructure import SQLAlchemyStoreDriver
from .bootstrap import create_upsert_engine

__version__ = "0.1.0"
__all__ = [
    "AtomicUpsertEngine",
    "ConstraintViolationError",
    "DeadlockDetectedError",
    "FatalStoreError",
    "RetryableConflictError",
    "SerializationFailureError",
    "SQLAlchemyStoreDriver",
    "StoreError",
    "UniqueConstraintViolationError",
    "UpsertArgumentError",
    "UpsertOutcome",
    "create_upsert_engine",
    "common",
    "config",
    "domain",
    "infrastructure",
    "services",
    "testing",
]
