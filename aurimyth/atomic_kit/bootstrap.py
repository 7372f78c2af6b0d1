"""应用引导。

按聚合配置依次初始化日志、存储驱动和 UPSERT 引擎。

使用示例:
    engine = create_upsert_engine()  # 从环境变量和 .env 加载配置
    outcome = await engine.upsert(User, {"email": "a@example.com"}, {"name": "Alice"})
    await engine.driver.close()
"""

from __future__ import annotations

from aurimyth.atomic_kit.common.logging import setup_logging
from aurimyth.atomic_kit.config import AtomicKitConfig
from aurimyth.atomic_kit.domain.upsert import AtomicUpsertEngine
from aurimyth.atomic_kit.infrastructure.database import SQLAlchemyStoreDriver


def create_upsert_engine(config: AtomicKitConfig | None = None) -> AtomicUpsertEngine:
    """创建使用 SQLAlchemy 驱动的 UPSERT 引擎。

    Args:
        config: 聚合配置（可选，默认从环境变量加载）

    Returns:
        AtomicUpsertEngine: 引擎实例，驱动持有的连接池需由调用方关闭
    """
    if config is None:
        config = AtomicKitConfig()

    # 初始化日志（必须在其他操作之前）
    setup_logging(
        log_level=config.log.level,
        log_file=config.log.file,
    )

    driver = SQLAlchemyStoreDriver.from_settings(config.database)
    return AtomicUpsertEngine(driver, settings=config.upsert)


__all__ = [
    "create_upsert_engine",
]
