"""
Technology stack profiler.

Two independent detection passes are merged by canonical technology name:
- manifest pass: declared dependencies matched against the catalog
- marker pass: config files, lock files and directory shapes

Marker evidence is stronger than a declared dependency, so when both passes
detect a technology the marker's category and confidence are kept and the
evidence of both is joined.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog

from projectlens.analysis.application.technology.catalog import MARKER_RULES, detect_stacks, match_dependency
from projectlens.analysis.application.technology.manifests import ManifestParseError, get_manifest_parser
from projectlens.analysis.domain.heuristics import HeuristicsConfig
from projectlens.analysis.domain.project_analysis import AnalysisStage, Diagnostic, DiagnosticKind
from projectlens.analysis.domain.structure import FileCategory, FileRecord, ProjectStructure
from projectlens.analysis.domain.tech_stack import (
    DetectionSource,
    LanguageShare,
    TechnologyCategory,
    TechnologyDetection,
    TechStackProfile,
)
from projectlens.shared.infrastructure.parallel import ParallelBatchExecutor
from projectlens.shared.languages.registry import LanguageRegistry
from projectlens.shared.utils.score_utils import percentage

logger = structlog.get_logger(__name__)


@dataclass
class _Detection:
    """Mutable accumulator used during the single-threaded merge."""

    name: str
    category: TechnologyCategory
    source: DetectionSource
    confidence: float
    evidence: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class _ManifestOutcome:
    relative_path: str
    ecosystem: str
    dependencies: tuple[str, ...] = ()
    error: str | None = None


_BUCKETS = {
    TechnologyCategory.FRAMEWORK: "frameworks",
    TechnologyCategory.LIBRARY: "libraries",
    TechnologyCategory.BUILD_TOOL: "build_tools",
    TechnologyCategory.TESTING: "testing_frameworks",
}


class TechnologyProfiler:
    """Detects languages, frameworks, libraries, build tools and test tools."""

    def __init__(
        self,
        heuristics: HeuristicsConfig | None = None,
        executor: ParallelBatchExecutor | None = None,
    ) -> None:
        self.heuristics = heuristics or HeuristicsConfig()
        self.executor = executor or ParallelBatchExecutor()

    async def profile_async(self, structure: ProjectStructure) -> tuple[TechStackProfile, list[Diagnostic]]:
        """
        Build the TechStackProfile of a project.

        Returns:
            (profile, diagnostics); unreadable or malformed manifests only
            produce diagnostics, and a cancelled batch adds a cancelled one
        """
        diagnostics: list[Diagnostic] = []
        detections: dict[str, _Detection] = {}

        manifests = [f for f in structure.files if get_manifest_parser(f.name) is not None]
        batch = await self.executor.execute_batch(manifests, self._read_manifest, batch_name="manifests")

        for outcome in batch.results:
            if outcome is None:
                continue
            if outcome.error is not None:
                diagnostics.append(self._manifest_failure(outcome.relative_path, outcome.error))
                continue
            self._merge_manifest(detections, outcome)
        for index, error in batch.failures:
            diagnostics.append(self._manifest_failure(manifests[index].relative_path, error))
        if batch.truncated:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.CANCELLED,
                    stage=AnalysisStage.TECHNOLOGY,
                    message=f"Technology detection cancelled; {batch.skipped} manifests not read",
                )
            )

        self._merge_markers(detections, structure)

        profile = self._build_profile(structure, detections)
        logger.info(
            "technology_profile_completed",
            manifests=len(manifests),
            detections=len(profile.detections),
            frameworks=list(profile.frameworks),
            primary_language=profile.primary_language,
        )
        return profile, diagnostics

    def profile(self, structure: ProjectStructure) -> tuple[TechStackProfile, list[Diagnostic]]:
        """Synchronous wrapper around profile_async()."""
        return asyncio.run(self.profile_async(structure))

    async def _read_manifest(self, record: FileRecord) -> _ManifestOutcome:
        return await asyncio.to_thread(self._parse_manifest, record)

    @staticmethod
    def _parse_manifest(record: FileRecord) -> _ManifestOutcome:
        parser = get_manifest_parser(record.name)
        try:
            with open(record.path, encoding="utf-8", errors="replace") as handle:
                text = handle.read()
            dependencies = parser.parse(text)
        except (OSError, ManifestParseError) as e:
            logger.warning("manifest_parse_failed", path=record.relative_path, error=str(e))
            return _ManifestOutcome(record.relative_path, parser.ecosystem, error=str(e))
        return _ManifestOutcome(record.relative_path, parser.ecosystem, tuple(dependencies))

    @staticmethod
    def _manifest_failure(path: str, error: str) -> Diagnostic:
        return Diagnostic(
            kind=DiagnosticKind.MANIFEST_READ_FAILURE,
            stage=AnalysisStage.TECHNOLOGY,
            message=f"Cannot read manifest: {error}",
            path=path,
        )

    def _merge_manifest(self, detections: dict[str, _Detection], outcome: _ManifestOutcome) -> None:
        for dependency in outcome.dependencies:
            rule = match_dependency(outcome.ecosystem, dependency)
            if rule is None:
                continue
            current = detections.get(rule.name)
            if current is None:
                detections[rule.name] = _Detection(
                    name=rule.name,
                    category=rule.category,
                    source=DetectionSource.MANIFEST,
                    confidence=self.heuristics.manifest_confidence,
                    evidence={outcome.relative_path},
                )
            else:
                current.evidence.add(outcome.relative_path)

    def _merge_markers(self, detections: dict[str, _Detection], structure: ProjectStructure) -> None:
        """Marker detections dominate manifest detections of the same name."""
        directory_paths = {d.path for d in structure.directories}
        for rule in MARKER_RULES:
            evidence: set[str] = set()
            regex = rule.regex
            if regex is not None:
                evidence.update(f.relative_path for f in structure.files if regex.match(f.name.lower()))
            evidence.update(d for d in rule.directories if d in directory_paths)
            if not evidence:
                continue

            current = detections.get(rule.name)
            if current is None:
                detections[rule.name] = _Detection(
                    name=rule.name,
                    category=rule.category,
                    source=DetectionSource.MARKER,
                    confidence=self.heuristics.marker_confidence,
                    evidence=evidence,
                )
            else:
                current.category = rule.category
                current.source = DetectionSource.MARKER
                current.confidence = self.heuristics.marker_confidence
                current.evidence.update(evidence)

    def _primary_languages(self, structure: ProjectStructure) -> tuple[LanguageShare, ...]:
        """Languages at or above the threshold share of source files."""
        source_files = structure.files_in_category(FileCategory.SOURCE)
        counts: dict[str, int] = {}
        for record in source_files:
            name = LanguageRegistry.get_display_name(record.language)
            if name:
                counts[name] = counts.get(name, 0) + 1

        shares = [
            LanguageShare(language=name, percentage=percentage(count, len(source_files)), file_count=count)
            for name, count in counts.items()
        ]
        kept = [s for s in shares if s.percentage >= self.heuristics.primary_language_threshold]
        return tuple(sorted(kept, key=lambda s: (-s.percentage, s.language)))

    def _build_profile(self, structure: ProjectStructure, detections: dict[str, _Detection]) -> TechStackProfile:
        buckets: dict[str, list[str]] = {bucket: [] for bucket in _BUCKETS.values()}
        frozen: list[TechnologyDetection] = []
        for name in sorted(detections):
            detection = detections[name]
            buckets[_BUCKETS[detection.category]].append(name)
            frozen.append(
                TechnologyDetection(
                    name=name,
                    category=detection.category,
                    source=detection.source,
                    confidence=detection.confidence,
                    evidence=tuple(sorted(detection.evidence)),
                )
            )

        return TechStackProfile(
            primary_languages=self._primary_languages(structure),
            frameworks=tuple(buckets["frameworks"]),
            libraries=tuple(buckets["libraries"]),
            build_tools=tuple(buckets["build_tools"]),
            testing_frameworks=tuple(buckets["testing_frameworks"]),
            stacks=tuple(detect_stacks(set(detections))),
            detections=tuple(frozen),
        )
