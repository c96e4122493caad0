"""Shared test fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import init_db
from app.engine.orchestrator import PaymentOrchestrator
from app.store.idempotency import IdempotencyCache
from app.store.payments import PaymentStore
from tests.support import FIXED_TODAY, StubBankGateway


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}", echo=False)
    await init_db(engine)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def store(session_factory) -> PaymentStore:
    return PaymentStore(session_factory)


@pytest.fixture
def cache(session_factory) -> IdempotencyCache:
    return IdempotencyCache(session_factory)


@pytest.fixture
def bank() -> StubBankGateway:
    return StubBankGateway()


@pytest.fixture
def orchestrator(store, cache, bank) -> PaymentOrchestrator:
    return PaymentOrchestrator(store=store, cache=cache, bank=bank, clock=lambda: FIXED_TODAY)
