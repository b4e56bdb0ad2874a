"""
Unit tests for dependency graph metrics.
"""

from projectlens.analysis.application.dependencies.metrics import (
    compute_metrics,
    find_cycles,
    topological_layers,
)
from projectlens.analysis.domain.dependency_graph import DependencyEdge, DependencyGraph, EdgeKind
from projectlens.analysis.domain.heuristics import HeuristicsConfig


def make_graph(edges, extra_nodes=()):
    nodes = set(extra_nodes)
    for source, target in edges:
        nodes.update((source, target))
    return DependencyGraph(
        nodes=tuple(sorted(nodes)),
        edges=tuple(DependencyEdge(source=s, target=t, kind=EdgeKind.STATIC_IMPORT) for s, t in sorted(edges)),
    )


class TestCycles:
    """Test cycle detection."""

    def test_three_node_cycle(self) -> None:
        """A->B->C->A is one cycle and the graph has no layers."""
        metrics = compute_metrics(make_graph([("a", "b"), ("b", "c"), ("c", "a")]))

        assert metrics.cycles_detected is True
        assert metrics.cycles == (("a", "b", "c"),)
        assert metrics.layers == ()
        assert "Circular dependencies detected between 1 module groups" in metrics.architectural_hints

    def test_cycles_are_rotated_to_smallest_node(self) -> None:
        adjacency = {"x": ["y"], "y": ["x"], "a": ["x"]}
        assert find_cycles(adjacency, 10) == [("x", "y")]

    def test_self_loop_free_dag(self) -> None:
        assert find_cycles({"a": ["b"], "b": []}, 10) == []

    def test_cycle_cap(self) -> None:
        adjacency = {"a": ["b", "c"], "b": ["a"], "c": ["a"]}
        assert len(find_cycles(adjacency, 1)) == 1
        assert find_cycles(adjacency, 10) == [("a", "b"), ("a", "c")]


class TestLayers:
    """Test topological layering."""

    def test_layers_start_at_unimported_modules(self) -> None:
        adjacency = {"app": ["service"], "service": ["repo"], "repo": [], "cli": ["service"]}
        assert topological_layers(adjacency) == [("app", "cli"), ("service",), ("repo",)]

    def test_cyclic_graph_has_no_layers(self) -> None:
        assert topological_layers({"a": ["b"], "b": ["a"]}) == []


class TestMetrics:
    """Test centrality and hints."""

    def test_central_modules_ranked_by_in_degree(self) -> None:
        graph = make_graph([("a", "util"), ("b", "util"), ("c", "util"), ("a", "b")])
        metrics = compute_metrics(graph)

        assert [(m.module, m.in_degree) for m in metrics.central_modules] == [("util", 3), ("b", 1)]
        assert "Hub module `util` is imported by 3 modules" in metrics.architectural_hints

    def test_central_module_limit(self) -> None:
        graph = make_graph([("a", "util"), ("b", "util"), ("a", "b")])
        metrics = compute_metrics(graph, HeuristicsConfig(central_module_limit=1))
        assert [m.module for m in metrics.central_modules] == ["util"]

    def test_layered_and_isolated_hints(self) -> None:
        graph = make_graph([("api", "service"), ("service", "repo")], extra_nodes=["scripts/seed"])
        metrics = compute_metrics(graph)

        assert metrics.layers == (("api", "scripts/seed"), ("service",), ("repo",))
        assert metrics.architectural_hints == (
            "Layered dependency structure with 3 layers",
            "1 isolated modules",
        )

    def test_empty_graph(self) -> None:
        metrics = compute_metrics(DependencyGraph())

        assert metrics.central_modules == ()
        assert metrics.cycles_detected is False
        assert metrics.architectural_hints == ()
