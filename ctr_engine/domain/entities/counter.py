"""Counter entity — one physical row in the counters table."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Counter:
    key: str
    value: int


@dataclass(frozen=True)
class GetOrCreateResult:
    """Outcome of a read that may have initialized the counter."""

    counter: Counter
    created: bool
