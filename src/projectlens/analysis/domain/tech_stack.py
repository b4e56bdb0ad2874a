"""
Technology stack domain models.

Output of the technology profiling stage.
"""

from __future__ import annotations

from enum import Enum

from pydantic import field_validator

from projectlens.shared.domain.base_model import BaseDomainModel
from projectlens.shared.utils.score_utils import clamp_score


class TechnologyCategory(str, Enum):
    """Bucket a detected technology is reported in."""

    FRAMEWORK = "framework"
    LIBRARY = "library"
    BUILD_TOOL = "build_tool"
    TESTING = "testing"


class DetectionSource(str, Enum):
    """Which detection pass produced the evidence."""

    MANIFEST = "manifest"  # Declared dependency
    MARKER = "marker"  # Config file / directory shape


class TechnologyDetection(BaseDomainModel):
    """A merged detection of one technology by canonical name."""

    name: str
    category: TechnologyCategory
    source: DetectionSource
    confidence: float
    evidence: tuple[str, ...] = ()  # Relative paths that contributed

    @field_validator("confidence")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


class LanguageShare(BaseDomainModel):
    """Share of source-category files written in one language."""

    language: str
    percentage: float
    file_count: int

    @field_validator("percentage")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


class TechStackProfile(BaseDomainModel):
    """
    Detected technology stack.

    All name collections are sorted tuples of canonical technology names.
    """

    primary_languages: tuple[LanguageShare, ...] = ()
    frameworks: tuple[str, ...] = ()
    libraries: tuple[str, ...] = ()
    build_tools: tuple[str, ...] = ()
    testing_frameworks: tuple[str, ...] = ()
    stacks: tuple[str, ...] = ()
    detections: tuple[TechnologyDetection, ...] = ()

    @property
    def all_technologies(self) -> set[str]:
        return set(self.frameworks) | set(self.libraries) | set(self.build_tools) | set(self.testing_frameworks)

    def has_technology(self, name: str) -> bool:
        """Check if a technology was detected in any category."""
        return name in self.all_technologies

    def get_detection(self, name: str) -> TechnologyDetection | None:
        for detection in self.detections:
            if detection.name == name:
                return detection
        return None

    @property
    def primary_language(self) -> str | None:
        return self.primary_languages[0].language if self.primary_languages else None
