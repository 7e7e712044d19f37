"""Integer-indexed graph backed by adjacency lists.

Nodes are the dense indices 0..n-1 and each node owns an ordered list
of neighbor indices.  The same representation serves directed and
undirected graphs: for an undirected graph every edge {u, v} is listed
once under u and once under v.  That symmetry is the caller's job --
the model does not check it, and the algorithms stay safe (they may
just give a less useful answer) when it is violated.

Duplicate neighbors and self-loops are legal.  The graph is immutable
after construction; algorithms that need to consume edges take a
working_copy() instead.
"""
from __future__ import annotations

from typing import Any, Iterator

from graph_engine.config import DEFAULT_LIMITS, EngineLimits
from graph_engine.errors import InvalidInputError


class Graph:
    """Read-only adjacency-list graph over nodes 0..n-1."""

    __slots__ = ("_adj",)

    def __init__(self, adjacency: list[list[int]]) -> None:
        self._adj: tuple[tuple[int, ...], ...] = tuple(
            tuple(nbrs) for nbrs in adjacency
        )

    @classmethod
    def from_adjacency_list(
        cls, adjacency: Any, limits: EngineLimits | None = None
    ) -> Graph:
        """Validate a raw adjacency list (e.g. decoded JSON) and wrap it.

        Raises InvalidInputError if *adjacency* is not a sequence of
        sequences of in-range integer node ids.
        """
        limits = limits or DEFAULT_LIMITS
        if not isinstance(adjacency, (list, tuple)):
            raise InvalidInputError(
                f"adjacencyList must be a list, got {type(adjacency).__name__}"
            )
        n = len(adjacency)
        if n > limits.max_nodes:
            raise InvalidInputError(
                f"adjacencyList has {n} nodes, limit is {limits.max_nodes}"
            )
        for node, nbrs in enumerate(adjacency):
            if not isinstance(nbrs, (list, tuple)):
                raise InvalidInputError(
                    f"adjacencyList[{node}] must be a list, "
                    f"got {type(nbrs).__name__}"
                )
            for pos, nbr in enumerate(nbrs):
                # bool is an int subclass, but True is not a node id
                if isinstance(nbr, bool) or not isinstance(nbr, int):
                    raise InvalidInputError(
                        f"adjacencyList[{node}][{pos}] must be an integer, "
                        f"got {nbr!r}"
                    )
                if not 0 <= nbr < n:
                    raise InvalidInputError(
                        f"adjacencyList[{node}][{pos}] = {nbr} is not a node "
                        f"id in 0..{n - 1}"
                    )
        return cls(adjacency)

    # ---- queries ---------------------------------------------------------

    def neighbors(self, node: int) -> list[int]:
        return list(self._adj[node])

    def degree(self, node: int) -> int:
        return len(self._adj[node])

    def has_edge(self, src: int, dst: int) -> bool:
        return 0 <= src < len(self._adj) and dst in self._adj[src]

    def nodes(self) -> Iterator[int]:
        return iter(range(len(self._adj)))

    def edges(self) -> Iterator[tuple[int, int]]:
        """Every (src, dst) entry, one per adjacency-list slot."""
        for src, dsts in enumerate(self._adj):
            for dst in dsts:
                yield src, dst

    def odd_degree_nodes(self) -> list[int]:
        return [n for n, nbrs in enumerate(self._adj) if len(nbrs) % 2]

    def working_copy(self) -> list[list[int]]:
        """Fresh mutable adjacency lists for edge-consuming traversals."""
        return [list(nbrs) for nbrs in self._adj]

    def to_adjacency_list(self) -> list[list[int]]:
        return self.working_copy()

    @property
    def node_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        """Number of adjacency entries (directed edge count)."""
        return sum(len(nbrs) for nbrs in self._adj)

    @property
    def undirected_edge_count(self) -> int:
        """Edge count when each edge is listed under both endpoints."""
        return self.edge_count // 2

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, node: object) -> bool:
        return isinstance(node, int) and 0 <= node < len(self._adj)

    def __len__(self) -> int:
        return self.node_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._adj == other._adj

    def __hash__(self) -> int:
        return hash(self._adj)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"
