"""Eulerian path construction with Hierholzer's algorithm.

An undirected graph has an Eulerian path only if the number of
odd-degree nodes is 0 (the path is a circuit and may start anywhere)
or 2 (the path must start at one of them).  Any other count rejects
the graph straight away.

The degree test says nothing about connectivity.  Instead of a
separate connectivity pass, the traversal itself settles it: after the
walk, any edge left in the working lists belongs to a component the
walk never reached, and the answer is "no path" rather than a partial
one.

The walk:
  1.  Push the start node.
  2.  While the top node still has an unused edge, pop that edge from
      both endpoints' working lists and push the far endpoint.
  3.  When the top node has no unused edges left, pop it onto the
      output.  The output is the Eulerian path in reverse.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from graph_engine.config import DEFAULT_LIMITS, EngineLimits
from graph_engine.graph.adjacency import Graph


@dataclass(slots=True)
class EulerianResult:
    """Result of Eulerian path construction."""
    has_path: bool
    path: list[int] | None = None

    def to_payload(self) -> dict[str, Any]:
        return {"hasPath": self.has_path, "path": self.path}


def find_eulerian_path(
    graph: Graph, limits: EngineLimits | None = None
) -> EulerianResult:
    """Build an Eulerian path through undirected *graph* if one exists.

    The returned path has undirected_edge_count + 1 nodes and uses every
    edge exactly once.  An empty graph (no nodes) has no path.  Raises
    ResourceLimitError if the walk stack grows past
    limits.max_stack_depth.
    """
    limits = limits or DEFAULT_LIMITS
    if graph.node_count == 0:
        return EulerianResult(has_path=False, path=None)

    odd = graph.odd_degree_nodes()
    if len(odd) not in (0, 2):
        return EulerianResult(has_path=False, path=None)

    work = graph.working_copy()
    start = odd[0] if odd else 0

    stack = [start]
    reversed_path: list[int] = []
    while stack:
        node = stack[-1]
        if work[node]:
            nxt = work[node].pop()
            try:
                work[nxt].remove(node)
            except ValueError:
                # asymmetric input: the edge is only listed under node
                pass
            stack.append(nxt)
            limits.check_stack(len(stack))
        else:
            reversed_path.append(stack.pop())

    if any(work):
        return EulerianResult(has_path=False, path=None)

    reversed_path.reverse()
    return EulerianResult(has_path=True, path=reversed_path)
