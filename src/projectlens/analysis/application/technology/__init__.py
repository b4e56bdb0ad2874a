"""Technology detection from dependency manifests and marker files."""

from projectlens.analysis.application.technology.profiler import TechnologyProfiler

__all__ = ["TechnologyProfiler"]
