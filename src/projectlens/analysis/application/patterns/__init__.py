"""Naming convention, architecture and code idiom profiling."""

from projectlens.analysis.application.patterns.architecture import ArchitectureScorer
from projectlens.analysis.application.patterns.naming import NamingConventionDetector
from projectlens.analysis.application.patterns.profiler import PatternProfiler

__all__ = ["ArchitectureScorer", "NamingConventionDetector", "PatternProfiler"]
