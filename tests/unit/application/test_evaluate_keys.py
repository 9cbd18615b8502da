"""Tests for KeyEvaluator fan-out, join and winner selection."""

from __future__ import annotations

import pytest

from ctr_engine.application.use_cases.evaluate_keys import KeyEvaluator
from ctr_engine.domain.errors import SetAfterMissingRead, StoreUnavailable
from ctr_engine.domain.value_objects.beta_params import BetaParameters


@pytest.fixture
def evaluator(fake_processor):
    return KeyEvaluator(fake_processor)


@pytest.mark.asyncio
async def test_posterior_parameters_in_request_order(evaluator, fake_store):
    fake_store.values.update({
        "a_views": 100, "a_clicks": 90,
        "b_views": 10, "b_clicks": 1,
    })
    params = await evaluator.posterior_parameters(["b", "a", "new"])
    assert params == [
        BetaParameters(2.0, 10.0),
        BetaParameters(91.0, 11.0),
        BetaParameters(1.0, 1.0),
    ]


@pytest.mark.asyncio
async def test_sample_keys_reports_every_key(evaluator):
    result = await evaluator.sample_keys(["x", "y", "z"])
    assert set(result.sampled_values) == {"x", "y", "z"}
    assert all(0.0 <= v <= 1.0 for v in result.sampled_values.values())
    assert result.sampled_score == max(result.sampled_values.values())
    assert result.sampled_key in ("x", "y", "z")


@pytest.mark.asyncio
async def test_strong_key_wins_majority(evaluator, fake_store):
    """a (100 views, 90 clicks) should beat b (10 views, 1 click) most of the time."""
    fake_store.values.update({
        "a_views": 100, "a_clicks": 90,
        "b_views": 10, "b_clicks": 1,
    })
    wins = 0
    rounds = 200
    for _ in range(rounds):
        result = await evaluator.sample_keys(["a", "b"])
        wins += result.sampled_key == "a"
    assert wins > rounds // 2


@pytest.mark.asyncio
async def test_failure_fails_whole_request(evaluator, fake_store):
    fake_store.unavailable.add("b_views")
    with pytest.raises(StoreUnavailable, match="b_views"):
        await evaluator.sample_keys(["a", "b", "c"])


@pytest.mark.asyncio
async def test_lowest_index_error_wins(evaluator, fake_store):
    fake_store.unavailable.add("c_views")
    fake_store.init_failures.add("b_views")
    with pytest.raises(SetAfterMissingRead, match="b_views"):
        await evaluator.posterior_parameters(["a", "b", "c"])


@pytest.mark.asyncio
async def test_siblings_finish_despite_failure(evaluator, fake_store):
    """No cancellation: every key is read before the error surfaces."""
    fake_store.unavailable.add("a_views")
    with pytest.raises(StoreUnavailable):
        await evaluator.sample_keys(["a", "b", "c"])
    read = {key for op, key in fake_store.calls if op == "get_or_create"}
    assert {"b_views", "b_clicks", "c_views", "c_clicks"} <= read
