"""Graph model plus the cycle and Eulerian path searches."""

from graph_engine.graph.adjacency import Graph
from graph_engine.graph.cycle_detector import (
    CycleResult,
    detect_directed_cycle,
    detect_undirected_cycle,
)
from graph_engine.graph.eulerian import EulerianResult, find_eulerian_path

__all__ = [
    "CycleResult",
    "EulerianResult",
    "Graph",
    "detect_directed_cycle",
    "detect_undirected_cycle",
    "find_eulerian_path",
]
