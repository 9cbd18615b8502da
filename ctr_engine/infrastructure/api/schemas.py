"""Response schemas."""

from pydantic import BaseModel


class CounterOut(BaseModel):
    key: str
    value: int


class CTROut(BaseModel):
    key: str
    views: int
    clicks: int


class BetaParametersOut(BaseModel):
    alpha: float
    beta: float


class SampleOut(BaseModel):
    sampled_key: str
    sampled_score: float
    sampled_values: dict[str, float]
