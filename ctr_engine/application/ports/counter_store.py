"""Port interface for counter persistence."""

from abc import ABC, abstractmethod

from ctr_engine.domain.entities.counter import Counter, GetOrCreateResult


class CounterStore(ABC):
    @abstractmethod
    async def get_or_create(self, key: str) -> GetOrCreateResult:
        """Read the counter; if absent, persist it with value 0.

        Raises StoreUnavailable if the read fails and SetAfterMissingRead if
        the initialization write fails.
        """
        ...

    async def get(self, key: str) -> Counter:
        result = await self.get_or_create(key)
        return result.counter

    @abstractmethod
    async def set(self, key: str, value: int) -> Counter:
        """Overwrite (or create) the counter. Last writer wins."""
        ...

    @abstractmethod
    async def increment_and_get(self, key: str) -> Counter:
        """Atomically add 1 at the store level and return the new value.

        An absent row is treated as 0. Must never lose updates under
        concurrent callers.
        """
        ...
