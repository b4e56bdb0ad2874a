"""
Analysis Domain Models.

Records produced by the analysis stages and merged into a ProjectAnalysis.
"""

from projectlens.analysis.domain.dependency_graph import (
    CentralModule,
    DependencyEdge,
    DependencyGraph,
    EdgeKind,
    GraphMetrics,
)
from projectlens.analysis.domain.heuristics import HeuristicsConfig, load_heuristics
from projectlens.analysis.domain.patterns import (
    ArchitecturePatternResult,
    ConsistencyMetrics,
    IdentifierCategory,
    NamingConventionResult,
    NamingStyle,
    PatternProfile,
)
from projectlens.analysis.domain.project_analysis import (
    AnalysisStage,
    Diagnostic,
    DiagnosticKind,
    ProjectAnalysis,
    ScanMode,
)
from projectlens.analysis.domain.structure import DirectoryRecord, FileCategory, FileRecord, ProjectStructure
from projectlens.analysis.domain.tech_stack import (
    DetectionSource,
    LanguageShare,
    TechnologyCategory,
    TechnologyDetection,
    TechStackProfile,
)

__all__ = [
    # Structure
    "FileCategory",
    "FileRecord",
    "DirectoryRecord",
    "ProjectStructure",
    # Technology
    "TechnologyCategory",
    "DetectionSource",
    "TechnologyDetection",
    "LanguageShare",
    "TechStackProfile",
    # Patterns
    "NamingStyle",
    "IdentifierCategory",
    "NamingConventionResult",
    "ArchitecturePatternResult",
    "ConsistencyMetrics",
    "PatternProfile",
    # Dependencies
    "EdgeKind",
    "DependencyEdge",
    "DependencyGraph",
    "CentralModule",
    "GraphMetrics",
    # Analysis
    "ScanMode",
    "AnalysisStage",
    "DiagnosticKind",
    "Diagnostic",
    "ProjectAnalysis",
    "HeuristicsConfig",
    "load_heuristics",
]
