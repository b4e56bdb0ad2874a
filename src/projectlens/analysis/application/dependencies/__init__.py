"""Module dependency graph construction and metrics."""

from projectlens.analysis.application.dependencies.builder import DependencyGraphBuilder, GraphBuildResult
from projectlens.analysis.application.dependencies.metrics import compute_metrics
from projectlens.analysis.application.dependencies.resolver import ModuleResolver

__all__ = ["DependencyGraphBuilder", "GraphBuildResult", "ModuleResolver", "compute_metrics"]
