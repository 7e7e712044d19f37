"""Error taxonomy shared by the algorithms and the dispatcher.

Algorithms raise these for input they cannot work with.  A search that
simply finds nothing (no cycle, no Eulerian path, no ladder) is not an
error and returns a negative result instead.
"""
from __future__ import annotations


class EngineError(Exception):
    """Base class for failures reported back as ERROR responses."""

    code = "ENGINE_ERROR"


class InvalidInputError(EngineError):
    """Raised when a request payload has the wrong shape or values."""

    code = "INVALID_INPUT"


class ResourceLimitError(EngineError):
    """Raised when a search outgrows a configured bound."""

    code = "RESOURCE_LIMIT"

    def __init__(self, what: str, limit: int) -> None:
        self.what = what
        self.limit = limit
        super().__init__(f"{what} exceeded the limit of {limit}")
