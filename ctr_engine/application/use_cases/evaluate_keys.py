"""KeyEvaluator — concurrent CTR retrieval and sampling across several keys."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from ctr_engine.application.use_cases.counters import CountersProcessor
from ctr_engine.domain.policies import thompson
from ctr_engine.domain.policies.thompson import SampleResult
from ctr_engine.domain.value_objects.beta_params import BetaParameters

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyEvaluator:
    """Fans out one task per key and joins before computing anything.

    Each task writes to its own slot of the gathered result list. All tasks
    run to completion even when one fails; the request then fails with the
    error of the earliest failed key.
    """

    def __init__(self, processor: CountersProcessor):
        self._processor = processor

    async def sample_keys(self, keys: Sequence[str]) -> SampleResult:
        scores = await self._fan_out(keys, self._processor.sample)
        result = thompson.select_winner(keys, scores)
        logger.debug(
            "Sampled %d keys, winner=%r score=%.4f",
            len(keys), result.sampled_key, result.sampled_score,
        )
        return result

    async def posterior_parameters(self, keys: Sequence[str]) -> list[BetaParameters]:
        return await self._fan_out(keys, self._processor.posterior_parameters)

    async def _fan_out(
        self, keys: Sequence[str], work: Callable[[str], Awaitable[T]]
    ) -> list[T]:
        outcomes = await asyncio.gather(
            *(work(key) for key in keys), return_exceptions=True
        )
        for key, outcome in zip(keys, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("Key %s: evaluation failed: %s", key, outcome)
                raise outcome
        return list(outcomes)
