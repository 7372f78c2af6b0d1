"""SQLAlchemy 存储驱动。

每个事务使用一个独立的 AsyncSession：
- 正常退出时提交，异常时回滚
- 加锁读取编译为 SELECT ... FOR UPDATE（SQLite 会忽略 FOR UPDATE，依靠库级写锁）
- 所有 DBAPI 异常在驱动边界转换为领域存储异常

使用示例:
    driver = SQLAlchemyStoreDriver.from_settings(DatabaseSettings())
    engine = AtomicUpsertEngine(driver)
    ...
    await driver.close()
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from aurimyth.atomic_kit.common.logging import logger
from aurimyth.atomic_kit.config import DatabaseSettings
from aurimyth.atomic_kit.domain.upsert.driver import IStoreDriver, IStoreTransaction, LocateQuery, ModelType
from aurimyth.atomic_kit.domain.upsert.locator import RowLocator

from .errors import translate_errors


class SQLAlchemyStoreTransaction(IStoreTransaction):
    """基于 AsyncSession 的事务操作。

    只执行 flush，提交由 SQLAlchemyStoreDriver.transaction() 负责。
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def locking_read(self, query: LocateQuery[ModelType]) -> ModelType | None:
        statement = RowLocator.build_statement(query)
        with translate_errors():
            result = await self._session.execute(statement)
            return result.scalars().first()

    async def insert(self, model_class: type[ModelType], fields: Mapping[str, Any]) -> ModelType:
        record = model_class(**fields)
        self._session.add(record)
        with translate_errors():
            await self._session.flush()
            await self._session.refresh(record)
        logger.debug(f"插入实体: {record!r}")
        return record

    async def update(self, record: ModelType, values: Mapping[str, Any]) -> ModelType:
        for key, value in values.items():
            setattr(record, key, value)
        with translate_errors():
            await self._session.flush()
            await self._session.refresh(record)
        logger.debug(f"更新实体: {record!r}")
        return record


class SQLAlchemyStoreDriver(IStoreDriver):
    """SQLAlchemy 异步存储驱动。"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        engine: AsyncEngine | None = None,
    ) -> None:
        """初始化驱动。

        Args:
            session_factory: 会话工厂
            engine: 由驱动负责释放的引擎（可选）
        """
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> SQLAlchemyStoreDriver:
        """根据数据库配置创建引擎和会话工厂。"""
        engine_kwargs: dict[str, Any] = {"echo": settings.echo}
        if settings.isolation_level:
            engine_kwargs["isolation_level"] = settings.isolation_level

        engine = create_async_engine(settings.url, pool_pre_ping=True, **engine_kwargs)
        session_factory = async_sessionmaker(
            engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )
        logger.info(f"存储驱动初始化完成: {engine.url.render_as_string(hide_password=True)}")
        return cls(session_factory, engine=engine)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLAlchemyStoreTransaction]:
        # 提交后仍需读取记录属性
        async with self._session_factory(expire_on_commit=False) as session:
            try:
                with translate_errors():
                    async with session.begin():
                        yield SQLAlchemyStoreTransaction(session)
            except Exception as exc:
                logger.debug(f"事务回滚: {type(exc).__name__}: {exc}")
                raise

    async def close(self) -> None:
        """释放驱动持有的引擎。"""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("存储驱动连接已关闭")
            self._engine = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


__all__ = [
    "SQLAlchemyStoreDriver",
    "SQLAlchemyStoreTransaction",
]
