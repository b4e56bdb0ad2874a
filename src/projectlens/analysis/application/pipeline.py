"""
Project analysis pipeline.

Entry point of the library. Runs the four analysis stages and merges their
outputs into a single ProjectAnalysis:

1. Traversal: walk, filter, classify and sample the tree.
2. Technology and dependencies, concurrently (both only need the structure).
3. Patterns, which also reads the technology profile.

Stages never raise for data-quality issues; they return diagnostics that
are merged, de-duplicated and sorted here.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

import structlog

from projectlens.analysis.application.cache import AnalysisCache, compute_fingerprint
from projectlens.analysis.application.dependencies.builder import DependencyGraphBuilder
from projectlens.analysis.application.discovery.traverser import FileTraverser
from projectlens.analysis.application.options import ScanOptions
from projectlens.analysis.application.patterns.profiler import PatternProfiler
from projectlens.analysis.application.technology.profiler import TechnologyProfiler
from projectlens.analysis.domain.dependency_graph import DependencyGraph, GraphMetrics
from projectlens.analysis.domain.heuristics import HeuristicsConfig, load_heuristics
from projectlens.analysis.domain.patterns import PatternProfile
from projectlens.analysis.domain.project_analysis import (
    AnalysisStage,
    Diagnostic,
    DiagnosticKind,
    ProjectAnalysis,
    ScanMode,
    sort_diagnostics,
)
from projectlens.analysis.domain.tech_stack import TechStackProfile
from projectlens.shared.domain.exceptions import InvalidInputError
from projectlens.shared.infrastructure.config import Settings
from projectlens.shared.infrastructure.config import settings as default_settings
from projectlens.shared.infrastructure.ignore_matcher import read_gitignore
from projectlens.shared.infrastructure.parallel import CancellationToken, ParallelBatchExecutor

logger = structlog.get_logger(__name__)


def _stage_cancelled(diagnostics: list[Diagnostic]) -> bool:
    return any(d.kind == DiagnosticKind.CANCELLED for d in diagnostics)


def _cancelled_before(stage: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.CANCELLED,
        stage=AnalysisStage.PIPELINE,
        message=f"Analysis cancelled before the {stage} stage; later results are empty",
    )


class ProjectAnalyzer:
    """
    Runs the full analysis of one project tree.

    Examples:
        >>> analyzer = ProjectAnalyzer()
        >>> analysis = analyzer.analyze("/path/to/project", ignore_patterns=["dist/"])
        >>> analysis.tech_stack.primary_language
        'TypeScript'
    """

    def __init__(
        self,
        settings: Settings | None = None,
        heuristics: HeuristicsConfig | None = None,
        cache: AnalysisCache | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.heuristics = heuristics or load_heuristics(self.settings.heuristics_file)
        self.cache = cache

    def _resolve_root(self, root: str | Path) -> Path:
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise InvalidInputError(f"Project root does not exist: {root}", context={"root": str(root)})
        if not root_path.is_dir():
            raise InvalidInputError(f"Project root is not a directory: {root}", context={"root": str(root)})
        return root_path.resolve()

    def _ignore_patterns(
        self, root: Path, ignore_patterns: list[str] | tuple[str, ...], use_gitignore: bool
    ) -> list[str]:
        """Defaults first, then the caller's patterns, then the root .gitignore."""
        patterns = list(self.settings.default_ignore_patterns)
        patterns.extend(ignore_patterns)
        if use_gitignore:
            patterns.extend(read_gitignore(root))
        return patterns

    async def analyze_async(
        self,
        root: str | Path,
        ignore_patterns: list[str] | tuple[str, ...] = (),
        mode: ScanMode | str = ScanMode.SHALLOW,
        use_gitignore: bool = False,
        cancel_token: CancellationToken | None = None,
    ) -> ProjectAnalysis:
        """
        Analyze a project tree.

        Args:
            root: Project root directory
            ignore_patterns: Caller gitignore-style patterns (applied after the defaults)
            mode: Shallow or deep scan limits
            use_gitignore: Also apply the root .gitignore
            cancel_token: Optional caller-controlled cancellation

        Returns:
            ProjectAnalysis; partial (truncated) when a cap or cancellation
            cut work short

        Raises:
            InvalidInputError: If root is missing or not a directory, or mode is unknown
        """
        options = ScanOptions.for_mode(mode, self.settings)
        root_path = self._resolve_root(root)
        patterns = self._ignore_patterns(root_path, ignore_patterns, use_gitignore)
        start_time = time.time()

        logger.info("analysis_started", root=str(root_path), mode=options.mode.value, patterns=len(patterns))

        traversal = await FileTraverser(root_path, patterns, options, cancel_token).traverse_async()
        structure = traversal.structure
        diagnostics: list[Diagnostic] = list(traversal.diagnostics)
        truncated = traversal.truncated

        fingerprint = None
        if self.cache is not None and not truncated:
            fingerprint = compute_fingerprint(structure, options.mode, patterns)
            cached = self.cache.get(str(root_path), fingerprint)
            if cached is not None:
                logger.info("analysis_served_from_cache", root=str(root_path))
                return cached

        executor = ParallelBatchExecutor(
            concurrency_limit=options.concurrency_limit,
            item_timeout=options.item_timeout,
            cancel_token=cancel_token,
        )
        tech_stack = TechStackProfile()
        patterns_profile = PatternProfile()
        graph, metrics = DependencyGraph(), GraphMetrics()

        if self._is_cancelled(cancel_token):
            diagnostics.append(_cancelled_before(AnalysisStage.TECHNOLOGY.value))
            truncated = True
        else:
            technology = TechnologyProfiler(self.heuristics, executor)
            builder = DependencyGraphBuilder(self.heuristics, executor)
            (tech_stack, tech_diagnostics), graph_result = await asyncio.gather(
                technology.profile_async(structure),
                builder.build_async(structure, options.max_files_to_parse),
            )
            diagnostics.extend(tech_diagnostics)
            diagnostics.extend(graph_result.diagnostics)
            graph, metrics = graph_result.graph, graph_result.metrics
            truncated = truncated or graph_result.truncated or _stage_cancelled(tech_diagnostics)

            if self._is_cancelled(cancel_token):
                diagnostics.append(_cancelled_before(AnalysisStage.PATTERNS.value))
                truncated = True
            else:
                profiler = PatternProfiler(self.heuristics, executor)
                patterns_profile, pattern_diagnostics = await profiler.profile_async(
                    structure, tech_stack, options.sample_files
                )
                diagnostics.extend(pattern_diagnostics)
                truncated = truncated or _stage_cancelled(pattern_diagnostics)

        analysis = ProjectAnalysis(
            project_root=str(root_path),
            project_name=root_path.name,
            scan_mode=options.mode,
            structure=structure,
            tech_stack=tech_stack,
            patterns=patterns_profile,
            dependency_graph=graph,
            graph_metrics=metrics,
            diagnostics=sort_diagnostics(diagnostics),
            truncated=truncated,
        )

        if self.cache is not None and fingerprint is not None and not self._is_cancelled(cancel_token):
            self.cache.put(str(root_path), fingerprint, analysis)

        logger.info(
            "analysis_completed",
            root=str(root_path),
            files=structure.total_files,
            modules=graph.module_count,
            diagnostics=len(analysis.diagnostics),
            truncated=truncated,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return analysis

    def analyze(
        self,
        root: str | Path,
        ignore_patterns: list[str] | tuple[str, ...] = (),
        mode: ScanMode | str = ScanMode.SHALLOW,
        use_gitignore: bool = False,
        cancel_token: CancellationToken | None = None,
    ) -> ProjectAnalysis:
        """Synchronous wrapper around analyze_async()."""
        return asyncio.run(self.analyze_async(root, ignore_patterns, mode, use_gitignore, cancel_token))

    @staticmethod
    def _is_cancelled(cancel_token: CancellationToken | None) -> bool:
        return cancel_token is not None and cancel_token.is_cancelled
