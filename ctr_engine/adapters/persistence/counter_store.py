"""SQLAlchemy implementation of the CounterStore port."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ctr_engine.adapters.persistence.models import (
    COUNTER_KEY_COLUMN,
    COUNTER_VALUE_COLUMN,
    counters_table,
)
from ctr_engine.application.ports.counter_store import CounterStore
from ctr_engine.domain.entities.counter import Counter, GetOrCreateResult
from ctr_engine.domain.errors import (
    MalformedStoredValue,
    SetAfterMissingRead,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)

# Dialects with a native INSERT ... ON CONFLICT.
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _parse_value(key: str, raw: object) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw, 10)
        except ValueError:
            pass
    raise MalformedStoredValue(
        f"cannot parse {COUNTER_VALUE_COLUMN} attribute {raw!r} of key {key!r} as integer"
    )


class SqlCounterStore(CounterStore):
    """Counters table accessed through short, independent transactions.

    Every operation opens its own session, so one store instance can serve
    any number of concurrent callers.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], table_name: str):
        self._sessions = session_factory
        self._t = counters_table(table_name)
        self._k = self._t.c[COUNTER_KEY_COLUMN]
        self._v = self._t.c[COUNTER_VALUE_COLUMN]

    def _insert(self, session: AsyncSession):
        dialect = session.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect](self._t)
        except KeyError:
            raise StoreUnavailable(f"dialect {dialect!r} has no upsert support") from None

    async def _read(self, session: AsyncSession, key: str):
        return await session.scalar(select(self._v).where(self._k == key))

    async def get_or_create(self, key: str) -> GetOrCreateResult:
        try:
            async with self._sessions() as session:
                raw = await self._read(session, key)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"cannot get counter value for key {key!r}: {e}") from e

        if raw is not None:
            return GetOrCreateResult(Counter(key=key, value=_parse_value(key, raw)), created=False)

        # Insert-if-absent: a concurrent initializer or increment keeps its value.
        try:
            async with self._sessions() as session, session.begin():
                stmt = (
                    self._insert(session)
                    .values({COUNTER_KEY_COLUMN: key, COUNTER_VALUE_COLUMN: 0})
                    .on_conflict_do_nothing(index_elements=[self._k])
                )
                await session.execute(stmt)
                raw = await self._read(session, key)
        except (SQLAlchemyError, OSError, StoreUnavailable) as e:
            raise SetAfterMissingRead(f"cannot init counter for key {key!r}: {e}") from e

        logger.info("Counter %s initialized in %s", key, self._t.name)
        return GetOrCreateResult(Counter(key=key, value=_parse_value(key, raw)), created=True)

    async def set(self, key: str, value: int) -> Counter:
        try:
            async with self._sessions() as session, session.begin():
                stmt = (
                    self._insert(session)
                    .values({COUNTER_KEY_COLUMN: key, COUNTER_VALUE_COLUMN: value})
                    .on_conflict_do_update(
                        index_elements=[self._k],
                        set_={COUNTER_VALUE_COLUMN: value},
                    )
                )
                await session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"cannot put counter value for key {key!r}: {e}") from e

        logger.info("Counter %s set to %d", key, value)
        return Counter(key=key, value=value)

    async def increment_and_get(self, key: str) -> Counter:
        try:
            async with self._sessions() as session, session.begin():
                stmt = (
                    self._insert(session)
                    .values({COUNTER_KEY_COLUMN: key, COUNTER_VALUE_COLUMN: 1})
                    .on_conflict_do_update(
                        index_elements=[self._k],
                        set_={COUNTER_VALUE_COLUMN: self._v + 1},
                    )
                    .returning(self._v)
                )
                result = await session.execute(stmt)
                raw = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"cannot update counter value for key {key!r}: {e}") from e

        if raw is None:
            raise MalformedStoredValue(
                f"cannot find the {COUNTER_VALUE_COLUMN} attribute in response for key {key!r}"
            )
        return Counter(key=key, value=_parse_value(key, raw))
