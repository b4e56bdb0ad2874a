"""
Pattern profiler.

Runs lexical extraction over a deterministic sample of source files, then
aggregates naming conventions, architecture scores, recurring idioms and
consistency metrics into a PatternProfile.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import Sequence, TypeVar

import structlog

from projectlens.analysis.application.patterns.architecture import ArchitectureScorer
from projectlens.analysis.application.patterns.extractors import ExtractionResult, extract, get_extractor
from projectlens.analysis.application.patterns.naming import NamingConventionDetector
from projectlens.analysis.domain.heuristics import HeuristicsConfig
from projectlens.analysis.domain.patterns import (
    ArchitecturePatternResult,
    ConsistencyMetrics,
    IdentifierCategory,
    NamingConventionResult,
    PatternProfile,
)
from projectlens.analysis.domain.project_analysis import AnalysisStage, Diagnostic, DiagnosticKind
from projectlens.analysis.domain.structure import FileCategory, FileRecord, ProjectStructure
from projectlens.analysis.domain.tech_stack import TechStackProfile
from projectlens.shared.infrastructure.parallel import ParallelBatchExecutor

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_NAMED_FILE_CATEGORIES = (FileCategory.SOURCE, FileCategory.TEST, FileCategory.STYLESHEET)


def select_evenly(items: Sequence[T], limit: int) -> list[T]:
    """
    Pick at most limit items at evenly spaced indices.

    Examples:
        >>> select_evenly(list(range(10)), 5)
        [0, 2, 4, 6, 8]
    """
    if limit <= 0:
        return []
    if len(items) <= limit:
        return list(items)
    return [items[i * len(items) // limit] for i in range(limit)]


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class PatternProfiler:
    """Profiles naming conventions, architecture patterns and code idioms."""

    def __init__(
        self,
        heuristics: HeuristicsConfig | None = None,
        executor: ParallelBatchExecutor | None = None,
    ) -> None:
        self.heuristics = heuristics or HeuristicsConfig()
        self.executor = executor or ParallelBatchExecutor()
        self.naming = NamingConventionDetector()
        self.architecture = ArchitectureScorer(self.heuristics)

    def select_files(self, structure: ProjectStructure, sample_files: int) -> list[FileRecord]:
        """Sampled code files with a supported extractor, in path order."""
        candidates = [
            f
            for f in structure.files
            if f.category.may_contain_code and f.has_sample and get_extractor(f.language) is not None
        ]
        return select_evenly(candidates, sample_files)

    async def profile_async(
        self,
        structure: ProjectStructure,
        tech_stack: TechStackProfile | None = None,
        sample_files: int = 50,
    ) -> tuple[PatternProfile, list[Diagnostic]]:
        """
        Build the PatternProfile of a project.

        Args:
            structure: Traversal output
            tech_stack: Technology profile, used by framework-aware indicators
            sample_files: Maximum number of files to extract identifiers from

        Returns:
            (profile, diagnostics); files whose extraction fails are skipped,
            and a cancelled batch adds a cancelled diagnostic
        """
        tech_stack = tech_stack or TechStackProfile()
        selected = self.select_files(structure, sample_files)

        batch = await self.executor.execute_batch(selected, self._extract_file, batch_name="patterns")

        diagnostics = [
            Diagnostic(
                kind=DiagnosticKind.PARSE_FAILURE,
                stage=AnalysisStage.PATTERNS,
                message=f"Extraction failed: {error}",
                path=selected[index].relative_path,
            )
            for index, error in batch.failures
        ]
        if batch.truncated:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.CANCELLED,
                    stage=AnalysisStage.PATTERNS,
                    message=f"Pattern extraction cancelled; {batch.skipped} sampled files not analyzed",
                )
            )
        extractions = [r for r in batch.results if r is not None]

        naming = self._naming_conventions(structure, extractions)
        architecture = self.architecture.detect(structure, tech_stack)
        idiom_counts = self._recurring_idioms(extractions)

        profile = PatternProfile(
            naming_conventions={result.category.value: result for result in naming},
            architecture_patterns=tuple(architecture),
            code_patterns=tuple(idiom_counts),
            code_pattern_counts=idiom_counts,
            consistency=self._consistency(naming, architecture),
            files_analyzed=len(extractions),
        )

        logger.info(
            "pattern_profile_completed",
            files_analyzed=profile.files_analyzed,
            architecture=[p.name for p in architecture],
            code_patterns=len(profile.code_patterns),
            failures=len(diagnostics),
        )
        return profile, diagnostics

    def profile(
        self, structure: ProjectStructure, tech_stack: TechStackProfile | None = None, sample_files: int = 50
    ) -> tuple[PatternProfile, list[Diagnostic]]:
        """Synchronous wrapper around profile_async()."""
        return asyncio.run(self.profile_async(structure, tech_stack, sample_files))

    async def _extract_file(self, record: FileRecord) -> ExtractionResult:
        return await asyncio.to_thread(extract, record.language, record.content_sample or "")

    def _naming_conventions(
        self, structure: ProjectStructure, extractions: list[ExtractionResult]
    ) -> list[NamingConventionResult]:
        variables: list[str] = []
        functions: list[str] = []
        classes: list[str] = []
        for extraction in extractions:
            variables.extend(extraction.variables)
            functions.extend(extraction.functions)
            classes.extend(extraction.classes)

        file_names = [
            f.stem for f in structure.files if f.category in _NAMED_FILE_CATEGORIES and not f.name.startswith(".")
        ]
        directory_names = [
            d.name for d in structure.directories if not d.is_root and not d.name.startswith(".")
        ]

        observations = {
            IdentifierCategory.VARIABLE: variables,
            IdentifierCategory.FUNCTION: functions,
            IdentifierCategory.CLASS: classes,
            IdentifierCategory.FILE: file_names,
            IdentifierCategory.DIRECTORY: directory_names,
        }
        return [self.naming.analyze(category, names) for category, names in observations.items()]

    def _recurring_idioms(self, extractions: list[ExtractionResult]) -> dict[str, int]:
        """Idioms seen in enough files, ranked by file count then name."""
        counts: Counter[str] = Counter()
        for extraction in extractions:
            counts.update(extraction.idioms)
        recurring = [(name, n) for name, n in counts.items() if n >= self.heuristics.code_pattern_min_files]
        recurring.sort(key=lambda item: (-item[1], item[0]))
        return dict(recurring)

    @staticmethod
    def _consistency(
        naming: list[NamingConventionResult], architecture: list[ArchitecturePatternResult]
    ) -> ConsistencyMetrics:
        category_scores = {r.category.value: r.confidence for r in naming if r.total > 0}
        naming_score = mean(list(category_scores.values()))
        structure_score = architecture[0].score if architecture else 0.0
        return ConsistencyMetrics(
            naming_consistency=naming_score,
            structure_consistency=structure_score,
            overall_score=mean([naming_score, structure_score]),
            category_scores=category_scores,
        )
