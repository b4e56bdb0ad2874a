"""
Project analysis record and diagnostics.

ProjectAnalysis is the single record handed to downstream generators.
It holds no timings so that repeated runs serialize identically.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from projectlens.analysis.domain.dependency_graph import DependencyGraph, GraphMetrics
from projectlens.analysis.domain.patterns import PatternProfile
from projectlens.analysis.domain.structure import ProjectStructure
from projectlens.analysis.domain.tech_stack import TechStackProfile
from projectlens.shared.domain.base_model import BaseDomainModel


class ScanMode(str, Enum):
    """Shallow scans sample fewer files and parse fewer dependencies."""

    SHALLOW = "shallow"
    DEEP = "deep"


class AnalysisStage(str, Enum):
    """Pipeline stage that produced a diagnostic (in pipeline order)."""

    TRAVERSAL = "traversal"
    TECHNOLOGY = "technology"
    PATTERNS = "patterns"
    DEPENDENCIES = "dependencies"
    PIPELINE = "pipeline"


_STAGE_ORDER = {stage: index for index, stage in enumerate(AnalysisStage)}


class DiagnosticKind(str, Enum):
    """Non-fatal issue kinds."""

    INACCESSIBLE_PATH = "inaccessible_path"
    PARSE_FAILURE = "parse_failure"
    MANIFEST_READ_FAILURE = "manifest_read_failure"
    RESOURCE_CAP_EXCEEDED = "resource_cap_exceeded"
    CANCELLED = "cancelled"


class Diagnostic(BaseDomainModel):
    """A non-fatal issue encountered during analysis."""

    kind: DiagnosticKind
    stage: AnalysisStage
    message: str
    path: str | None = None

    def sort_key(self) -> tuple:
        return (_STAGE_ORDER[self.stage], self.path or "", self.kind.value, self.message)


def sort_diagnostics(diagnostics: list[Diagnostic]) -> tuple[Diagnostic, ...]:
    """Deterministic, de-duplicated diagnostic order."""
    unique = {d.sort_key(): d for d in diagnostics}
    return tuple(unique[key] for key in sorted(unique))


class ProjectAnalysis(BaseDomainModel):
    """Merged output of all four analysis stages."""

    project_root: str
    project_name: str
    scan_mode: ScanMode = ScanMode.SHALLOW
    structure: ProjectStructure
    tech_stack: TechStackProfile = Field(default_factory=TechStackProfile)
    patterns: PatternProfile = Field(default_factory=PatternProfile)
    dependency_graph: DependencyGraph = Field(default_factory=DependencyGraph)
    graph_metrics: GraphMetrics = Field(default_factory=GraphMetrics)
    diagnostics: tuple[Diagnostic, ...] = ()
    truncated: bool = False

    def diagnostics_of(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]
