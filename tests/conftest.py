"""测试配置。"""

from __future__ import annotations

import pytest
import pytest_asyncio
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from aurimyth.atomic_kit.config import UpsertSettings
from aurimyth.atomic_kit.domain.models import Base
from aurimyth.atomic_kit.domain.upsert import AtomicUpsertEngine, CapabilityRegistry
from aurimyth.atomic_kit.infrastructure.database import SQLAlchemyStoreDriver
from aurimyth.atomic_kit.testing import InMemoryStoreDriver

from tests import models  # noqa: F401  注册测试表


@pytest.fixture
def registry() -> CapabilityRegistry:
    return CapabilityRegistry()


@pytest.fixture
def memory_driver() -> InMemoryStoreDriver:
    return InMemoryStoreDriver()


@pytest.fixture
def memory_engine(memory_driver: InMemoryStoreDriver, registry: CapabilityRegistry) -> AtomicUpsertEngine:
    return AtomicUpsertEngine(memory_driver, registry=registry, settings=UpsertSettings(max_attempts=3))


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture
def sqlite_driver(session_factory) -> SQLAlchemyStoreDriver:
    return SQLAlchemyStoreDriver(session_factory)


@pytest.fixture
def sqlite_engine(sqlite_driver: SQLAlchemyStoreDriver, registry: CapabilityRegistry) -> AtomicUpsertEngine:
    return AtomicUpsertEngine(sqlite_driver, registry=registry, settings=UpsertSettings(max_attempts=3))


@pytest.fixture
def log_messages():
    """收集 loguru 日志消息。"""
    messages: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: messages.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)
