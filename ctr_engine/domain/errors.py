"""Domain errors — what can go wrong talking to the counter store or the caller."""


class CtrEngineError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(CtrEngineError):
    pass


# ─── Store failures (surfaced as 500) ───────────────────────────────


class StoreError(CtrEngineError):
    pass


class StoreUnavailable(StoreError):
    """The counter store could not complete a read or write."""


class SetAfterMissingRead(StoreError):
    """A missing counter was found but its initialization write failed."""


class MalformedStoredValue(StoreError):
    """The store returned a value that is not an integer."""


# ─── Caller input (surfaced as 400) ─────────────────────────────────


class RequestError(CtrEngineError):
    pass


class MissingParameter(RequestError):
    def __init__(self, name: str):
        super().__init__(f"{name} parameter is mandatory")
        self.name = name


class InvalidParameter(RequestError):
    def __init__(self, name: str, raw: str, reason: str = "must be a non-negative integer"):
        super().__init__(f"{name} parameter {raw!r} {reason}")
        self.name = name
        self.raw = raw
