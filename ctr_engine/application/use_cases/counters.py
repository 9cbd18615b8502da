"""CountersProcessor — views/clicks bookkeeping for logical keys."""

from __future__ import annotations

import logging

from ctr_engine.application.ports.counter_store import CounterStore
from ctr_engine.domain.entities.counter import Counter
from ctr_engine.domain.entities.ctr import CTR
from ctr_engine.domain.errors import StoreError
from ctr_engine.domain.policies import thompson
from ctr_engine.domain.policies.counter_keys import clicks_key, views_key
from ctr_engine.domain.value_objects.beta_params import BetaParameters

logger = logging.getLogger(__name__)


class CountersProcessor:
    """Maps logical keys onto their views/clicks counters."""

    def __init__(self, store: CounterStore):
        self._store = store

    async def add_view(self, key: str) -> Counter:
        return await self._increment(views_key(key))

    async def add_click(self, key: str) -> Counter:
        return await self._increment(clicks_key(key))

    async def set_views(self, key: str, views: int) -> Counter:
        return await self._store.set(views_key(key), views)

    async def set_clicks(self, key: str, clicks: int) -> Counter:
        return await self._store.set(clicks_key(key), clicks)

    async def get_ctr(self, key: str) -> CTR:
        views = await self._store.get(views_key(key))
        clicks = await self._store.get(clicks_key(key))
        return CTR(key=key, views=views.value, clicks=clicks.value)

    async def sample(self, key: str) -> float:
        ctr = await self.get_ctr(key)
        return thompson.sample(ctr)

    async def posterior_parameters(self, key: str) -> BetaParameters:
        ctr = await self.get_ctr(key)
        return ctr.posterior_parameters()

    async def _increment(self, counter_key: str) -> Counter:
        # Best effort: the increment upserts an absent row anyway.
        try:
            await self._store.get_or_create(counter_key)
        except StoreError as e:
            logger.warning("Counter %s: initialization before increment failed: %s", counter_key, e)
        return await self._store.increment_and_get(counter_key)
