"""
Pattern profile domain models.

Naming conventions, architecture pattern scores, recurring code idioms and
consistency metrics.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from projectlens.shared.domain.base_model import BaseDomainModel, FrozenMapping
from projectlens.shared.utils.score_utils import clamp_score


class NamingStyle(str, Enum):
    """Naming style buckets."""

    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SNAKE_CASE = "snake_case"
    KEBAB_CASE = "kebab-case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    UNRECOGNIZED = "unrecognized"
    UNKNOWN = "unknown"  # No observations in the category


# Resolution order for identifiers that satisfy several styles
STYLE_PRIORITY: tuple[NamingStyle, ...] = (
    NamingStyle.CAMEL_CASE,
    NamingStyle.PASCAL_CASE,
    NamingStyle.SNAKE_CASE,
    NamingStyle.KEBAB_CASE,
    NamingStyle.SCREAMING_SNAKE_CASE,
)


class IdentifierCategory(str, Enum):
    """Kinds of identifiers whose naming is profiled."""

    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    FILE = "file"
    DIRECTORY = "directory"


class NamingConventionResult(BaseDomainModel):
    """Dominant naming style for one identifier category."""

    category: IdentifierCategory
    dominant_style: NamingStyle = NamingStyle.UNKNOWN
    confidence: float = 0.0
    example: str | None = None
    total: int = 0
    # style value -> count
    distribution: FrozenMapping[str, int] = Field(default_factory=dict, validate_default=True)

    @field_validator("confidence")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


class ArchitecturePatternResult(BaseDomainModel):
    """Score of one architecture pattern with the evidence behind it."""

    name: str
    score: float
    evidence: tuple[str, ...] = ()

    @field_validator("score")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


class ConsistencyMetrics(BaseDomainModel):
    """Aggregate confidence scores, used for reporting only."""

    naming_consistency: float = 0.0
    structure_consistency: float = 0.0
    overall_score: float = 0.0
    category_scores: FrozenMapping[str, float] = Field(default_factory=dict, validate_default=True)

    @field_validator("naming_consistency", "structure_consistency", "overall_score")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_score(value)


class PatternProfile(BaseDomainModel):
    """Complete pattern analysis of a project."""

    naming_conventions: FrozenMapping[str, NamingConventionResult] = Field(default_factory=dict, validate_default=True)
    architecture_patterns: tuple[ArchitecturePatternResult, ...] = ()
    code_patterns: tuple[str, ...] = ()
    # idiom -> files
    code_pattern_counts: FrozenMapping[str, int] = Field(default_factory=dict, validate_default=True)
    consistency: ConsistencyMetrics = Field(default_factory=ConsistencyMetrics)
    files_analyzed: int = 0

    def naming_for(self, category: IdentifierCategory) -> NamingConventionResult | None:
        return self.naming_conventions.get(category.value)

    def get_architecture(self, name: str) -> ArchitecturePatternResult | None:
        for result in self.architecture_patterns:
            if result.name == name:
                return result
        return None

    @property
    def top_architecture(self) -> ArchitecturePatternResult | None:
        return self.architecture_patterns[0] if self.architecture_patterns else None
