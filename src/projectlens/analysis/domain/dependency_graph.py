"""
Dependency Graph Domain Models.

Module-level import graph extracted lexically from source files.
Node ids are project-relative POSIX paths with the extension stripped
(e.g. "src/utils/format").
"""

from __future__ import annotations

from enum import Enum

from pydantic import model_validator

from projectlens.shared.domain.base_model import BaseDomainModel


class EdgeKind(str, Enum):
    """How a module references another."""

    STATIC_IMPORT = "static_import"  # import / from / #include / use / mod
    DYNAMIC_IMPORT = "dynamic_import"  # import("x"), importlib.import_module("x")
    REQUIRE = "require"  # require(), require_relative, PHP include/require


class DependencyEdge(BaseDomainModel):
    """A directed reference: source imports target."""

    source: str
    target: str
    kind: EdgeKind


class DependencyGraph(BaseDomainModel):
    """
    Project-wide module dependency graph.

    Edges only reference nodes of the same graph.
    """

    nodes: tuple[str, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()

    @model_validator(mode="after")
    def _check_edges(self) -> "DependencyGraph":
        known = set(self.nodes)
        for edge in self.edges:
            if edge.source not in known or edge.target not in known:
                raise ValueError(f"Edge references unknown node: {edge.source} -> {edge.target}")
        return self

    @property
    def module_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def adjacency(self) -> dict[str, list[str]]:
        """Node -> sorted distinct targets (every node present)."""
        adj: dict[str, set[str]] = {node: set() for node in self.nodes}
        for edge in self.edges:
            adj[edge.source].add(edge.target)
        return {node: sorted(targets) for node, targets in adj.items()}

    def inverse_adjacency(self) -> dict[str, list[str]]:
        """Node -> sorted distinct importers (every node present)."""
        inverse: dict[str, set[str]] = {node: set() for node in self.nodes}
        for edge in self.edges:
            inverse[edge.target].add(edge.source)
        return {node: sorted(sources) for node, sources in inverse.items()}

    def dependencies_of(self, node: str) -> list[str]:
        """Modules imported by node."""
        return sorted({e.target for e in self.edges if e.source == node})

    def dependents_of(self, node: str) -> list[str]:
        """Modules importing node."""
        return sorted({e.source for e in self.edges if e.target == node})


class CentralModule(BaseDomainModel):
    """A module ranked by how many distinct modules import it."""

    module: str
    in_degree: int


class GraphMetrics(BaseDomainModel):
    """Derived metrics of a DependencyGraph."""

    central_modules: tuple[CentralModule, ...] = ()
    layers: tuple[tuple[str, ...], ...] = ()  # Empty when the graph is cyclic
    cycles_detected: bool = False
    cycles: tuple[tuple[str, ...], ...] = ()
    architectural_hints: tuple[str, ...] = ()
