"""
Dependency graph metrics.

Centrality, cycle detection, topological layering and the plain-language
hints derived from them. All traversals visit nodes and neighbours in sorted
order, so the metrics of a graph are fully deterministic.
"""

from __future__ import annotations

from collections import deque

import structlog

from projectlens.analysis.domain.dependency_graph import CentralModule, DependencyGraph, GraphMetrics
from projectlens.analysis.domain.heuristics import HeuristicsConfig

logger = structlog.get_logger(__name__)

# Fewer layers than this is not reported as a layered structure
MIN_REPORTED_LAYERS = 3


def central_modules(inverse: dict[str, list[str]], limit: int) -> list[CentralModule]:
    """Imported modules ranked by distinct importers, then path."""
    ranked = sorted(
        ((node, len(importers)) for node, importers in inverse.items() if importers),
        key=lambda item: (-item[1], item[0]),
    )
    return [CentralModule(module=node, in_degree=degree) for node, degree in ranked[:limit]]


def _rotate(cycle: list[str]) -> tuple[str, ...]:
    start = cycle.index(min(cycle))
    return tuple(cycle[start:] + cycle[:start])


def find_cycles(adjacency: dict[str, list[str]], max_cycles: int) -> list[tuple[str, ...]]:
    """
    Cycles found by an iterative depth-first search.

    A neighbour still on the recursion stack closes a cycle: the stack slice
    from that neighbour to the current node. Cycles are rotated to start at
    their smallest node, de-duplicated, capped and sorted.

    Examples:
        >>> find_cycles({"a": ["b"], "b": ["c"], "c": ["a"]}, 10)
        [('a', 'b', 'c')]
    """
    found: set[tuple[str, ...]] = set()
    visited: set[str] = set()

    for root in sorted(adjacency):
        if root in visited:
            continue
        path: list[str] = [root]
        on_path: set[str] = {root}
        stack = [iter(adjacency.get(root, ()))]
        visited.add(root)

        while stack:
            neighbour = next(stack[-1], None)
            if neighbour is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if neighbour in on_path:
                found.add(_rotate(path[path.index(neighbour):]))
                if len(found) >= max_cycles:
                    return sorted(found)
            elif neighbour not in visited:
                visited.add(neighbour)
                path.append(neighbour)
                on_path.add(neighbour)
                stack.append(iter(adjacency.get(neighbour, ())))

    return sorted(found)


def topological_layers(adjacency: dict[str, list[str]]) -> list[tuple[str, ...]]:
    """
    Kahn layering: each round removes every node nobody left depends on.

    Layer 0 holds the modules no other module imports. Returns an empty
    list if a cycle keeps nodes from ever reaching in-degree zero.
    """
    in_degree = {node: 0 for node in adjacency}
    for targets in adjacency.values():
        for target in targets:
            in_degree[target] += 1

    layers: list[tuple[str, ...]] = []
    ready = deque(sorted(node for node, degree in in_degree.items() if degree == 0))
    removed = 0
    while ready:
        layer = tuple(sorted(ready))
        ready.clear()
        layers.append(layer)
        removed += len(layer)
        for node in layer:
            for target in adjacency[node]:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    ready.append(target)

    return layers if removed == len(adjacency) else []


def architectural_hints(
    graph: DependencyGraph,
    central: list[CentralModule],
    cycles: list[tuple[str, ...]],
    layers: list[tuple[str, ...]],
    hub_min_dependents: int,
) -> list[str]:
    hints: list[str] = []
    if len(layers) >= MIN_REPORTED_LAYERS:
        hints.append(f"Layered dependency structure with {len(layers)} layers")
    if cycles:
        hints.append(f"Circular dependencies detected between {len(cycles)} module groups")
    for module in central:
        if module.in_degree >= hub_min_dependents:
            hints.append(f"Hub module `{module.module}` is imported by {module.in_degree} modules")

    connected = {e.source for e in graph.edges} | {e.target for e in graph.edges}
    isolated = sum(1 for node in graph.nodes if node not in connected)
    if isolated and graph.edges:
        hints.append(f"{isolated} isolated modules")
    return hints


def compute_metrics(graph: DependencyGraph, heuristics: HeuristicsConfig | None = None) -> GraphMetrics:
    """Derive centrality, cycles, layers and hints from a dependency graph."""
    heuristics = heuristics or HeuristicsConfig()
    adjacency = graph.adjacency()

    central = central_modules(graph.inverse_adjacency(), heuristics.central_module_limit)
    cycles = find_cycles(adjacency, heuristics.max_cycles)
    layers = [] if cycles else topological_layers(adjacency)
    hints = architectural_hints(graph, central, cycles, layers, heuristics.hub_module_min_dependents)

    logger.debug("graph_metrics_computed", cycles=len(cycles), layers=len(layers), hints=len(hints))
    return GraphMetrics(
        central_modules=tuple(central),
        layers=tuple(layers),
        cycles_detected=bool(cycles),
        cycles=tuple(cycles),
        architectural_hints=tuple(hints),
    )
