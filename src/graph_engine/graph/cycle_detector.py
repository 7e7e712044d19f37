"""Cycle detection in directed and undirected graphs.

Directed graphs use DFS three-color marking:
  UNVISITED    -- node not yet reached
  IN_PROGRESS  -- node is on the current DFS path (ancestors of current node)
  DONE         -- node fully explored (all descendants visited)

An edge to an IN_PROGRESS node is a back edge, which means a cycle.

Undirected graphs only need visited/unvisited, but every edge shows up
in both endpoints' lists, so the edge we arrived on has to be ignored
or each edge would look like a 2-cycle.  Only that one entry is
skipped: a second copy of the same edge is a genuine parallel edge and
does close a cycle.

Both detectors keep their own work stack instead of recursing, so a
long path graph costs heap memory rather than Python frames.  The stack
is bounded by EngineLimits.max_stack_depth.

When a back edge v -> w is found, the witness cycle is rebuilt by
following parent pointers from v up to w.  The returned path is
[w, ..., v]: consecutive entries are tree edges and the back edge
closes the last entry onto the first.  A self-loop gives [v].
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from graph_engine.config import DEFAULT_LIMITS, EngineLimits
from graph_engine.graph.adjacency import Graph

UNVISITED, IN_PROGRESS, DONE = 0, 1, 2


@dataclass(slots=True)
class CycleResult:
    """Result of cycle detection."""
    has_cycle: bool
    cycle_path: list[int] | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"hasCycle": self.has_cycle, "cyclePath": self.cycle_path}


def _backtrace(parent: list[int | None], node: int, target: int) -> list[int]:
    """Walk parent pointers from *node* until *target* or the root."""
    path = [node]
    cur: int | None = node
    while cur != target:
        cur = parent[cur]
        if cur is None:
            break
        path.append(cur)
    path.reverse()
    return path


def detect_directed_cycle(
    graph: Graph, limits: EngineLimits | None = None
) -> CycleResult:
    """Detect whether *graph*, read as directed, contains a cycle.

    Stops at the first back edge found; this reports one witness cycle,
    not all of them.  Raises ResourceLimitError if the DFS path grows
    past limits.max_stack_depth.
    """
    limits = limits or DEFAULT_LIMITS
    n = graph.node_count
    state = [UNVISITED] * n
    parent: list[int | None] = [None] * n

    for root in graph.nodes():
        if state[root] != UNVISITED:
            continue
        state[root] = IN_PROGRESS
        stack: list[tuple[int, Iterator[int]]] = [
            (root, iter(graph.neighbors(root)))
        ]
        while stack:
            node, nbrs = stack[-1]
            for nbr in nbrs:
                if state[nbr] == IN_PROGRESS:
                    return CycleResult(
                        has_cycle=True,
                        cycle_path=_backtrace(parent, node, nbr),
                    )
                if state[nbr] == UNVISITED:
                    parent[nbr] = node
                    state[nbr] = IN_PROGRESS
                    stack.append((nbr, iter(graph.neighbors(nbr))))
                    limits.check_stack(len(stack))
                    break
            else:
                # iterator exhausted: every successor explored
                state[node] = DONE
                stack.pop()

    return CycleResult(has_cycle=False, cycle_path=None)


def detect_undirected_cycle(
    graph: Graph, limits: EngineLimits | None = None
) -> CycleResult:
    """Detect whether *graph*, read as undirected, contains a cycle.

    Expects symmetric adjacency.  Raises ResourceLimitError if the DFS
    path grows past limits.max_stack_depth.
    """
    limits = limits or DEFAULT_LIMITS
    n = graph.node_count
    visited = [False] * n
    parent: list[int | None] = [None] * n

    for root in graph.nodes():
        if visited[root]:
            continue
        visited[root] = True
        # frame: [node, neighbor iterator, parent entry still to skip (-1 = none)]
        stack: list[list[Any]] = [[root, iter(graph.neighbors(root)), -1]]
        while stack:
            frame = stack[-1]
            node = frame[0]
            for nbr in frame[1]:
                if nbr == frame[2]:
                    frame[2] = -1
                    continue
                if visited[nbr]:
                    return CycleResult(
                        has_cycle=True,
                        cycle_path=_backtrace(parent, node, nbr),
                    )
                parent[nbr] = node
                visited[nbr] = True
                stack.append([nbr, iter(graph.neighbors(nbr)), node])
                limits.check_stack(len(stack))
                break
            else:
                stack.pop()

    return CycleResult(has_cycle=False, cycle_path=None)
