"""Thompson sampling — Beta posterior draws and winner selection."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from ctr_engine.domain.entities.ctr import CTR

WINNER_FLOOR = 0.0


@dataclass
class SampleResult:
    """Sampled score per key plus the key that drew the highest one."""

    sampled_key: str = ""
    sampled_score: float = WINNER_FLOOR
    sampled_values: dict[str, float] = field(default_factory=dict)


def new_generator() -> np.random.Generator:
    """Fresh generator seeded from the nanosecond clock.

    Every call gets its own generator; concurrent samplers never share state.
    """
    return np.random.default_rng(time.time_ns())


def sample(ctr: CTR, rng: np.random.Generator | None = None) -> float:
    """Draw one plausible CTR from the key's Beta posterior.

    Args:
        ctr: aggregate whose posterior is sampled.
        rng: optional generator, mainly for reproducible tests.

    Returns:
        A value in [0, 1]. Keys with few observations give widely spread
        draws, keys with many observations concentrate near their mean.
    """
    params = ctr.posterior_parameters()
    rng = rng or new_generator()
    return float(rng.beta(params.alpha, params.beta))


def select_winner(keys: Sequence[str], scores: Sequence[float]) -> SampleResult:
    """Pick the key with the highest score, scanning in request order.

    The running maximum starts at 0.0 with an empty key, and only a strictly
    greater score replaces it: ties keep the earlier key, and an all-zero
    request reports "" as the winner.

    Raises:
        ValueError: if keys and scores differ in length.
    """
    if len(keys) != len(scores):
        raise ValueError("keys and scores must have the same length")

    result = SampleResult()
    for key, score in zip(keys, scores):
        result.sampled_values[key] = score
        if score > result.sampled_score:
            result.sampled_score = score
            result.sampled_key = key
    return result
