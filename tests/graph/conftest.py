"""Shared fixtures and checkers for the graph search tests."""
from __future__ import annotations

from collections import Counter

import pytest

from graph_engine.graph.adjacency import Graph


def undirected(n: int, edges: list[tuple[int, int]]) -> Graph:
    """Build a symmetric adjacency list from an edge list."""
    adj: list[list[int]] = [[] for _ in range(n)]
    for u, v in edges:
        adj[u].append(v)
        adj[v].append(u)
    return Graph(adj)


def edge_multiset(graph: Graph) -> Counter:
    """Undirected edges of a symmetric graph, as a multiset of sorted pairs."""
    counts: Counter = Counter()
    for u, v in graph.edges():
        counts[(min(u, v), max(u, v))] += 1
    # every edge was counted from both endpoints
    return Counter({e: c // 2 for e, c in counts.items()})


def assert_eulerian(graph: Graph, path: list[int]) -> None:
    """*path* walks every edge of *graph* exactly once."""
    assert len(path) == graph.undirected_edge_count + 1
    walked: Counter = Counter()
    for u, v in zip(path, path[1:]):
        walked[(min(u, v), max(u, v))] += 1
    assert walked == edge_multiset(graph)


def assert_cycle(graph: Graph, path: list[int]) -> None:
    """Consecutive entries are edges and the last entry closes onto the first."""
    assert path
    for u, v in zip(path, path[1:]):
        assert graph.has_edge(u, v), f"Edge {u}->{v} not in graph"
    assert graph.has_edge(path[-1], path[0]), (
        f"Closing edge {path[-1]}->{path[0]} not in graph"
    )


@pytest.fixture
def empty_graph() -> Graph:
    return Graph([])


@pytest.fixture
def chain_graph() -> Graph:
    """0 -> 1 -> 2 -> 3"""
    return Graph([[1], [2], [3], []])


@pytest.fixture
def diamond_graph() -> Graph:
    """
    0 -> 1 -> 3
    0 -> 2 -> 3
    """
    return Graph([[1, 2], [3], [3], []])


@pytest.fixture
def triangle() -> Graph:
    """Undirected triangle {0,1}, {1,2}, {2,0}."""
    return undirected(3, [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def path_tree() -> Graph:
    """Undirected path 0 - 1 - 2 - 3."""
    return undirected(4, [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def square() -> Graph:
    """Undirected 4-cycle 0 - 1 - 2 - 3 - 0."""
    return undirected(4, [(0, 1), (1, 2), (2, 3), (3, 0)])
