"""Errors raised by galaxy generation."""


class GalaxyError(Exception):
    """Base class for galaxy generation failures."""


class InvalidParameter(GalaxyError, ValueError):
    """A parameter violates a structural precondition."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"{name}={value!r}: {reason}")


class ResourceExhaustion(GalaxyError, MemoryError):
    """The requested output would exceed a configured safety ceiling."""

    def __init__(self, what: str, requested: int, limit: int):
        self.what = what
        self.requested = requested
        self.limit = limit
        super().__init__(f"{what}: {requested:,} requested, limit is {limit:,}")
