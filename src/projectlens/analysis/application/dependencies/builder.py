"""
Dependency graph builder.

Parses up to max_files source files (ascending path order), resolves their
import references to in-project modules and builds the module graph plus
its derived metrics.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from projectlens.analysis.application.dependencies.metrics import compute_metrics
from projectlens.analysis.application.dependencies.resolver import ModuleResolver, node_id
from projectlens.analysis.application.patterns.extractors import ImportReference, extract, get_extractor
from projectlens.analysis.domain.dependency_graph import DependencyEdge, DependencyGraph, GraphMetrics
from projectlens.analysis.domain.heuristics import HeuristicsConfig
from projectlens.analysis.domain.project_analysis import AnalysisStage, Diagnostic, DiagnosticKind
from projectlens.analysis.domain.structure import FileCategory, FileRecord, ProjectStructure
from projectlens.shared.infrastructure.parallel import ParallelBatchExecutor

logger = structlog.get_logger(__name__)


@dataclass
class GraphBuildResult:
    """Graph, metrics and the issues met while building them."""

    graph: DependencyGraph
    metrics: GraphMetrics
    diagnostics: list[Diagnostic]
    truncated: bool = False


class DependencyGraphBuilder:
    """Builds the module-level dependency graph of a project."""

    def __init__(
        self,
        heuristics: HeuristicsConfig | None = None,
        executor: ParallelBatchExecutor | None = None,
    ) -> None:
        self.heuristics = heuristics or HeuristicsConfig()
        self.executor = executor or ParallelBatchExecutor()

    async def build_async(self, structure: ProjectStructure, max_files: int = 500) -> GraphBuildResult:
        """
        Build the dependency graph.

        Args:
            structure: Traversal output
            max_files: Maximum number of source files to parse

        Returns:
            GraphBuildResult; truncated is set when the cap or a cancellation
            left files unparsed
        """
        diagnostics: list[Diagnostic] = []
        candidates = [
            f
            for f in structure.files_in_category(FileCategory.SOURCE)
            if f.has_sample and get_extractor(f.language) is not None
        ]
        parsed_files = candidates[:max_files]
        truncated = len(candidates) > len(parsed_files)
        if truncated:
            logger.warning("dependency_parse_cap_exceeded", candidates=len(candidates), max_files=max_files)
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.RESOURCE_CAP_EXCEEDED,
                    stage=AnalysisStage.DEPENDENCIES,
                    message=f"Parsed {len(parsed_files)} of {len(candidates)} source files (cap {max_files})",
                )
            )

        batch = await self.executor.execute_batch(parsed_files, self._extract_imports, batch_name="dependencies")
        truncated = truncated or batch.truncated
        for index, error in batch.failures:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.PARSE_FAILURE,
                    stage=AnalysisStage.DEPENDENCIES,
                    message=f"Import extraction failed: {error}",
                    path=parsed_files[index].relative_path,
                )
            )
        if batch.truncated:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.CANCELLED,
                    stage=AnalysisStage.DEPENDENCIES,
                    message=f"Dependency extraction cancelled; {batch.skipped} files not parsed",
                )
            )

        graph = self._reduce(structure, parsed_files, batch.results)
        metrics = compute_metrics(graph, self.heuristics)

        logger.info(
            "dependency_graph_built",
            modules=graph.module_count,
            edges=graph.edge_count,
            cycles=len(metrics.cycles),
            truncated=truncated,
        )
        return GraphBuildResult(graph=graph, metrics=metrics, diagnostics=diagnostics, truncated=truncated)

    def build(self, structure: ProjectStructure, max_files: int = 500) -> GraphBuildResult:
        """Synchronous wrapper around build_async()."""
        return asyncio.run(self.build_async(structure, max_files))

    async def _extract_imports(self, record: FileRecord) -> list[ImportReference]:
        result = await asyncio.to_thread(extract, record.language, record.content_sample or "")
        return result.imports

    @staticmethod
    def _reduce(
        structure: ProjectStructure,
        parsed_files: list[FileRecord],
        results: list[list[ImportReference] | None],
    ) -> DependencyGraph:
        """Single-threaded merge of per-file imports into a sorted graph."""
        resolver = ModuleResolver(structure)
        nodes: set[str] = {node_id(f.relative_path) for f in parsed_files}
        edges: set[tuple[str, str, str]] = set()

        for record, imports in zip(parsed_files, results):
            if not imports:
                continue
            source = node_id(record.relative_path)
            for reference in imports:
                for target in resolver.resolve(record, reference):
                    nodes.add(target)
                    edges.add((source, target, reference.kind.value))

        return DependencyGraph(
            nodes=tuple(sorted(nodes)),
            edges=tuple(
                DependencyEdge(source=source, target=target, kind=kind) for source, target, kind in sorted(edges)
            ),
        )
