"""Analysis module - Project structure, stack, pattern and dependency profiling."""

from projectlens.analysis.application.cache import AnalysisCache
from projectlens.analysis.application.pipeline import ProjectAnalyzer
from projectlens.analysis.domain.project_analysis import Diagnostic, DiagnosticKind, ProjectAnalysis, ScanMode

__all__ = [
    "ProjectAnalyzer",
    "AnalysisCache",
    "ProjectAnalysis",
    "ScanMode",
    "Diagnostic",
    "DiagnosticKind",
]
