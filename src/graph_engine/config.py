"""Engine limits.

All bounds are per request.  The defaults are generous for the
classroom-sized graphs the engine is meant for; the CLI exposes each
one as a flag.
"""
from __future__ import annotations

import string
from dataclasses import dataclass

from graph_engine.errors import ResourceLimitError


@dataclass(frozen=True, slots=True)
class EngineLimits:
    """Resource bounds applied while validating and searching.

    Attributes:
        max_nodes: largest adjacency list accepted.
        max_stack_depth: bound on explicit DFS / Hierholzer work stacks.
        max_words: largest word list accepted by the ladder search.
        alphabet: characters tried at each position of a word.
    """

    max_nodes: int = 100_000
    max_stack_depth: int = 1_000_000
    max_words: int = 200_000
    alphabet: str = string.ascii_lowercase

    def check_stack(self, depth: int) -> None:
        if depth > self.max_stack_depth:
            raise ResourceLimitError("work stack depth", self.max_stack_depth)


DEFAULT_LIMITS = EngineLimits()
