"""Counter endpoints — record views/clicks, overwrite them, read the CTR."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ctr_engine.application.use_cases.counters import CountersProcessor
from ctr_engine.domain.entities.counter import Counter
from ctr_engine.infrastructure.api.dependencies import (
    get_processor,
    parse_count,
    require_key,
)
from ctr_engine.infrastructure.api.schemas import CounterOut, CTROut

router = APIRouter(tags=["counters"])


def _counter_out(c: Counter) -> CounterOut:
    return CounterOut(key=c.key, value=c.value)


@router.get("/add_view", response_model=CounterOut)
async def add_view(
    key: str = Depends(require_key),
    processor: CountersProcessor = Depends(get_processor),
):
    """Increment the views counter of *key*."""
    return _counter_out(await processor.add_view(key))


@router.get("/add_click", response_model=CounterOut)
async def add_click(
    key: str = Depends(require_key),
    processor: CountersProcessor = Depends(get_processor),
):
    """Increment the clicks counter of *key*."""
    return _counter_out(await processor.add_click(key))


@router.get("/set_views", response_model=CounterOut)
async def set_views(
    views: str = "",
    key: str = Depends(require_key),
    processor: CountersProcessor = Depends(get_processor),
):
    count = parse_count("views", views)
    return _counter_out(await processor.set_views(key, count))


@router.get("/set_clicks", response_model=CounterOut)
async def set_clicks(
    clicks: str = "",
    key: str = Depends(require_key),
    processor: CountersProcessor = Depends(get_processor),
):
    count = parse_count("clicks", clicks)
    return _counter_out(await processor.set_clicks(key, count))


@router.get("/ctr", response_model=CTROut)
async def get_ctr(
    key: str = Depends(require_key),
    processor: CountersProcessor = Depends(get_processor),
):
    ctr = await processor.get_ctr(key)
    return CTROut(key=ctr.key, views=ctr.views, clicks=ctr.clicks)
