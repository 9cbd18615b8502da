"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from ctr_engine.adapters.persistence.counter_store import SqlCounterStore
from ctr_engine.adapters.persistence.models import counters_table, metadata
from ctr_engine.application.ports.counter_store import CounterStore
from ctr_engine.application.use_cases.counters import CountersProcessor
from ctr_engine.domain.entities.counter import Counter, GetOrCreateResult
from ctr_engine.domain.errors import SetAfterMissingRead, StoreUnavailable

TEST_TABLE = "counters_test"

# ─── In-memory fake ─────────────────────────────────────────────────


class FakeCounterStore(CounterStore):
    """Dict-backed store. Yields to the loop before each call so tasks interleave."""

    def __init__(self, values: dict[str, int] | None = None):
        self.values: dict[str, int] = dict(values or {})
        self.unavailable: set[str] = set()
        self.init_failures: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    async def get_or_create(self, key):
        await asyncio.sleep(0)
        self.calls.append(("get_or_create", key))
        if key in self.unavailable:
            raise StoreUnavailable(f"cannot get counter value for key {key!r}: down")
        if key in self.values:
            return GetOrCreateResult(Counter(key, self.values[key]), created=False)
        if key in self.init_failures:
            raise SetAfterMissingRead(f"cannot init counter for key {key!r}: down")
        self.values[key] = 0
        return GetOrCreateResult(Counter(key, 0), created=True)

    async def set(self, key, value):
        await asyncio.sleep(0)
        self.calls.append(("set", key))
        if key in self.unavailable:
            raise StoreUnavailable(f"cannot put counter value for key {key!r}: down")
        self.values[key] = value
        return Counter(key, value)

    async def increment_and_get(self, key):
        await asyncio.sleep(0)
        self.calls.append(("increment_and_get", key))
        if key in self.unavailable:
            raise StoreUnavailable(f"cannot update counter value for key {key!r}: down")
        self.values[key] = self.values.get(key, 0) + 1
        return Counter(key, self.values[key])


@pytest.fixture
def fake_store():
    return FakeCounterStore()


@pytest.fixture
def fake_processor(fake_store):
    return CountersProcessor(fake_store)


# ─── SQLite-backed store ────────────────────────────────────────────


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "counters.db"


@pytest_asyncio.fixture
async def sql_engine(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all, tables=[counters_table(TEST_TABLE)])
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_store(sql_engine):
    return SqlCounterStore(async_sessionmaker(sql_engine, expire_on_commit=False), TEST_TABLE)
