"""BetaParameters value object — shape of a Beta posterior."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BetaParameters:
    alpha: float
    beta: float
