"""FastAPI dependency injection — wires the store adapter into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ctr_engine.adapters.persistence.counter_store import SqlCounterStore
from ctr_engine.application.use_cases.counters import CountersProcessor
from ctr_engine.application.use_cases.evaluate_keys import KeyEvaluator
from ctr_engine.config import Settings
from ctr_engine.domain.errors import ConfigurationError, InvalidParameter, MissingParameter

logger = logging.getLogger(__name__)

COUNTERS_TABLE_ENV = "COUNTERS_TABLE"

# Counters are stored as signed 64-bit integers.
MAX_COUNT = 2**63 - 1


def build_processor(
    cfg: Settings, session_factory: async_sessionmaker[AsyncSession]
) -> CountersProcessor:
    """Build a processor backed by the configured counters table.

    Raises:
        ConfigurationError: if COUNTERS_TABLE is not set.
    """
    if not cfg.counters_table:
        raise ConfigurationError(f"env variable {COUNTERS_TABLE_ENV!r} is mandatory")
    logger.info("Using counters table %s", cfg.counters_table)
    return CountersProcessor(SqlCounterStore(session_factory, cfg.counters_table))


def get_processor(request: Request) -> CountersProcessor:
    return request.app.state.processor


def get_evaluator(processor: CountersProcessor = Depends(get_processor)) -> KeyEvaluator:
    return KeyEvaluator(processor)


# ─── Query parameters ───────────────────────────────────────────────


def require_key(key: list[str] = Query(default=[])) -> str:
    """First value of a possibly repeated ``key`` parameter."""
    if not key or not key[0]:
        raise MissingParameter("key")
    return key[0]


def require_keys(key: list[str] = Query(default=[])) -> list[str]:
    if not key or any(not k for k in key):
        raise MissingParameter("key")
    return key


def parse_count(name: str, raw: str) -> int:
    """Parse a non-negative counter value from a query parameter."""
    if not raw:
        raise MissingParameter(name)
    try:
        value = int(raw, 10)
    except ValueError:
        raise InvalidParameter(name, raw) from None
    if value < 0:
        raise InvalidParameter(name, raw)
    if value > MAX_COUNT:
        raise InvalidParameter(name, raw, "does not fit in a 64-bit integer")
    return value
