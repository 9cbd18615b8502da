"""Sampling endpoints — Thompson draws and posterior parameters for several keys."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ctr_engine.application.use_cases.evaluate_keys import KeyEvaluator
from ctr_engine.infrastructure.api.dependencies import get_evaluator, require_keys
from ctr_engine.infrastructure.api.schemas import BetaParametersOut, SampleOut

router = APIRouter(tags=["sampling"])


@router.get("/sample", response_model=SampleOut)
async def sample(
    keys: list[str] = Depends(require_keys),
    evaluator: KeyEvaluator = Depends(get_evaluator),
):
    """Draw one posterior sample per key and report the highest."""
    result = await evaluator.sample_keys(keys)
    return SampleOut(
        sampled_key=result.sampled_key,
        sampled_score=result.sampled_score,
        sampled_values=result.sampled_values,
    )


@router.get("/distribution_params", response_model=list[BetaParametersOut])
async def distribution_params(
    keys: list[str] = Depends(require_keys),
    evaluator: KeyEvaluator = Depends(get_evaluator),
):
    """Beta posterior parameters per key, in request order."""
    params = await evaluator.posterior_parameters(keys)
    return [BetaParametersOut(alpha=p.alpha, beta=p.beta) for p in params]
