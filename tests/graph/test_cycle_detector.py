"""Tests for directed and undirected DFS cycle detection."""
from __future__ import annotations

import random

import pytest

from graph_engine.config import EngineLimits
from graph_engine.errors import ResourceLimitError
from graph_engine.graph.adjacency import Graph
from graph_engine.graph.cycle_detector import (
    CycleResult,
    detect_directed_cycle,
    detect_undirected_cycle,
)

from tests.graph.conftest import assert_cycle, undirected


class TestDirectedCycleDetector:
    def test_no_cycle_empty(self, empty_graph: Graph) -> None:
        result = detect_directed_cycle(empty_graph)
        assert not result.has_cycle
        assert result.cycle_path is None

    def test_no_cycle_chain(self, chain_graph: Graph) -> None:
        assert not detect_directed_cycle(chain_graph).has_cycle

    def test_no_cycle_diamond(self, diamond_graph: Graph) -> None:
        """Two paths into node 3 are a cross edge, not a back edge."""
        assert not detect_directed_cycle(diamond_graph).has_cycle

    def test_triangle_cycle_path(self) -> None:
        """0 -> 1 -> 2 -> 0 reports [0, 1, 2], closed by 2 -> 0."""
        g = Graph([[1], [2], [0]])
        result = detect_directed_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == [0, 1, 2]
        assert_cycle(g, result.cycle_path)

    def test_self_loop(self) -> None:
        result = detect_directed_cycle(Graph([[0]]))
        assert result.has_cycle
        assert result.cycle_path == [0]

    def test_two_cycle(self) -> None:
        g = Graph([[1], [0]])
        result = detect_directed_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == [0, 1]

    def test_deep_cycle_excludes_tail(self) -> None:
        """0 -> 1 -> 2 -> 3 -> 1: node 0 leads in but is not on the cycle."""
        g = Graph([[1], [2], [3], [1]])
        result = detect_directed_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == [1, 2, 3]

    def test_disconnected_with_cycle(self) -> None:
        """Cycle only in the second component."""
        g = Graph([[1], [], [3], [2]])
        result = detect_directed_cycle(g)
        assert result.has_cycle
        assert set(result.cycle_path) == {2, 3}

    def test_idempotent(self) -> None:
        g = Graph([[1, 2], [2], [3], [1]])
        assert detect_directed_cycle(g) == detect_directed_cycle(g)

    def test_no_false_positives_random_dags(self) -> None:
        """Edges only go from lower to higher ids, so no cycle exists."""
        rng = random.Random(42)
        for _ in range(50):
            n = rng.randint(2, 30)
            adj: list[list[int]] = [[] for _ in range(n)]
            for i in range(n):
                for j in range(i + 1, n):
                    if rng.random() < 0.3:
                        adj[i].append(j)
            result = detect_directed_cycle(Graph(adj))
            assert not result.has_cycle, f"False positive on DAG with {n} nodes"

    def test_no_false_negatives_random_cycles(self) -> None:
        """A chain 0 -> ... -> n-1 plus one back edge always closes a cycle."""
        rng = random.Random(43)
        for _ in range(50):
            n = rng.randint(3, 20)
            adj: list[list[int]] = [[i + 1] for i in range(n - 1)] + [[]]
            for i in range(n):
                for j in range(i + 2, n):
                    if rng.random() < 0.2:
                        adj[i].append(j)
            src = rng.randint(1, n - 1)
            dst = rng.randint(0, src - 1)
            adj[src].append(dst)
            g = Graph(adj)
            result = detect_directed_cycle(g)
            assert result.has_cycle, (
                f"False negative: missed cycle with back edge {src}->{dst}"
            )
            assert_cycle(g, result.cycle_path)

    def test_long_chain_does_not_recurse(self) -> None:
        """A 50k-node ring is far deeper than Python's recursion limit."""
        n = 50_000
        g = Graph([[(i + 1) % n] for i in range(n)])
        result = detect_directed_cycle(g)
        assert result.has_cycle
        assert len(result.cycle_path) == n

    def test_stack_limit(self) -> None:
        g = Graph([[i + 1] for i in range(99)] + [[]])
        with pytest.raises(ResourceLimitError, match="10"):
            detect_directed_cycle(g, EngineLimits(max_stack_depth=10))


class TestUndirectedCycleDetector:
    def test_triangle(self, triangle: Graph) -> None:
        result = detect_undirected_cycle(triangle)
        assert result.has_cycle
        assert sorted(result.cycle_path) == [0, 1, 2]
        assert_cycle(triangle, result.cycle_path)

    def test_tree_has_no_cycle(self, path_tree: Graph) -> None:
        result = detect_undirected_cycle(path_tree)
        assert result == CycleResult(has_cycle=False, cycle_path=None)

    def test_single_edge_is_not_a_cycle(self) -> None:
        assert not detect_undirected_cycle(undirected(2, [(0, 1)])).has_cycle

    def test_empty(self, empty_graph: Graph) -> None:
        assert not detect_undirected_cycle(empty_graph).has_cycle

    def test_square(self, square: Graph) -> None:
        result = detect_undirected_cycle(square)
        assert result.has_cycle
        assert sorted(result.cycle_path) == [0, 1, 2, 3]
        assert_cycle(square, result.cycle_path)

    def test_parallel_edges_form_cycle(self) -> None:
        """Two copies of {0, 1}: only one of them is the edge we came in on."""
        g = undirected(2, [(0, 1), (0, 1)])
        result = detect_undirected_cycle(g)
        assert result.has_cycle
        assert result.cycle_path == [0, 1]

    def test_self_loop(self) -> None:
        result = detect_undirected_cycle(Graph([[0, 0]]))
        assert result.has_cycle
        assert result.cycle_path == [0]

    def test_cycle_in_second_component(self) -> None:
        g = undirected(6, [(0, 1), (1, 2), (3, 4), (4, 5), (5, 3)])
        result = detect_undirected_cycle(g)
        assert result.has_cycle
        assert sorted(result.cycle_path) == [3, 4, 5]

    def test_random_trees_have_no_cycle(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            n = rng.randint(1, 40)
            edges = [(i, rng.randint(0, i - 1)) for i in range(1, n)]
            assert not detect_undirected_cycle(undirected(n, edges)).has_cycle

    def test_random_tree_plus_edge_has_cycle(self) -> None:
        rng = random.Random(8)
        for _ in range(50):
            n = rng.randint(3, 40)
            edges = [(i, rng.randint(0, i - 1)) for i in range(1, n)]
            existing = {frozenset(e) for e in edges}
            while True:
                u, v = rng.sample(range(n), 2)
                if frozenset((u, v)) not in existing:
                    break
            g = undirected(n, edges + [(u, v)])
            result = detect_undirected_cycle(g)
            assert result.has_cycle
            assert_cycle(g, result.cycle_path)

    def test_asymmetric_input_does_not_crash(self) -> None:
        g = Graph([[1], [], [0, 1]])
        assert isinstance(detect_undirected_cycle(g), CycleResult)

    def test_idempotent(self, square: Graph) -> None:
        assert detect_undirected_cycle(square) == detect_undirected_cycle(square)

    def test_stack_limit(self) -> None:
        g = undirected(100, [(i, i + 1) for i in range(99)])
        with pytest.raises(ResourceLimitError):
            detect_undirected_cycle(g, EngineLimits(max_stack_depth=10))


def test_payload_uses_wire_names() -> None:
    assert CycleResult(True, [0, 1]).to_payload() == {
        "hasCycle": True,
        "cyclePath": [0, 1],
    }
