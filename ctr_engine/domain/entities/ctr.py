"""CTR aggregate — views and clicks of one logical key."""

from __future__ import annotations

from dataclasses import dataclass

from ctr_engine.domain.value_objects.beta_params import BetaParameters

# Beta(1, 1) prior: uniform belief before any observation.
PRIOR_ALPHA = 1.0
PRIOR_BETA = 1.0


@dataclass(frozen=True)
class CTR:
    key: str
    views: int
    clicks: int

    def clamped_clicks(self) -> int:
        """Clicks bounded by views.

        Views and clicks live in separate rows and are incremented
        independently, so a read can observe more clicks than views.
        """
        return min(self.clicks, self.views)

    def mean(self) -> float:
        if self.views <= 0:
            return 0.0
        return self.clamped_clicks() / self.views

    def posterior_parameters(self) -> BetaParameters:
        """Conjugate update of the Beta(1, 1) prior with the observed counts."""
        views = max(self.views, 0)
        clicks = max(min(self.clicks, views), 0)
        return BetaParameters(
            alpha=clicks + PRIOR_ALPHA,
            beta=views - clicks + PRIOR_BETA,
        )
