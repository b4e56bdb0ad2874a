"""
Heuristic weights and thresholds.

Every score weight and threshold used by the profilers lives here as a named
field. Defaults can be overridden from a YAML file via load_heuristics().
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from projectlens.shared.domain.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class IndicatorKind(str, Enum):
    """Structural signals an architecture pattern can be scored on."""

    DIRECTORY = "directory"  # Directory base name anywhere in the tree
    ROOT_DIRECTORY = "root_directory"  # Directory directly under the root
    FILE_SUFFIX = "file_suffix"  # File name (sans extension) ends with a suffix
    FILE_NAME = "file_name"  # Exact file name anywhere in the tree
    COLOCATED_DIRECTORIES = "colocated_directories"  # All groups share one parent
    MIN_FILE_COUNT = "min_file_count"  # At least min_count files with these names
    FRAMEWORK = "framework"  # Framework present in the TechStackProfile


class Indicator(BaseModel):
    """
    One weighted indicator.

    values are alternatives, except for COLOCATED_DIRECTORIES where each
    value is a group of '|'-separated alternatives that must all be present.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: IndicatorKind
    values: tuple[str, ...]
    weight: float = Field(ge=0)
    min_count: int = Field(default=1, ge=1)


class PatternDefinition(BaseModel):
    """A named architecture pattern and its indicators."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    indicators: tuple[Indicator, ...]


def _ind(kind: IndicatorKind, *values: str, weight: float, min_count: int = 1) -> Indicator:
    return Indicator(kind=kind, values=values, weight=weight, min_count=min_count)


_D = IndicatorKind.DIRECTORY

# Definition order is also the tie-break order for equal scores.
DEFAULT_ARCHITECTURE_PATTERNS: tuple[PatternDefinition, ...] = (
    PatternDefinition(
        name="MVC",
        indicators=(
            _ind(_D, "models", "model", weight=30),
            _ind(_D, "views", "view", weight=30),
            _ind(_D, "controllers", "controller", weight=30),
            _ind(IndicatorKind.COLOCATED_DIRECTORIES, "models|model", "views|view", "controllers|controller", weight=10),
            _ind(IndicatorKind.FILE_SUFFIX, "controller", weight=10),
        ),
    ),
    PatternDefinition(
        name="MVVM",
        indicators=(
            _ind(_D, "viewmodels", "viewmodel", "view_models", "view-models", weight=40),
            _ind(IndicatorKind.FILE_SUFFIX, "viewmodel", weight=30),
            _ind(_D, "views", "view", weight=5),
            _ind(_D, "models", "model", weight=5),
            _ind(IndicatorKind.FRAMEWORK, "Angular", "Vue.js", "Flutter", weight=10),
        ),
    ),
    PatternDefinition(
        name="Monorepo",
        indicators=(
            _ind(IndicatorKind.ROOT_DIRECTORY, "packages", weight=35),
            _ind(IndicatorKind.ROOT_DIRECTORY, "apps", weight=30),
            _ind(IndicatorKind.ROOT_DIRECTORY, "libs", weight=15),
            _ind(
                IndicatorKind.FILE_NAME,
                "lerna.json",
                "pnpm-workspace.yaml",
                "nx.json",
                "turbo.json",
                "rush.json",
                weight=40,
            ),
            _ind(
                IndicatorKind.MIN_FILE_COUNT,
                "package.json",
                "pyproject.toml",
                "go.mod",
                "Cargo.toml",
                weight=25,
                min_count=3,
            ),
        ),
    ),
    PatternDefinition(
        name="Feature-Sliced",
        indicators=(
            _ind(_D, "features", weight=30),
            _ind(_D, "widgets", weight=20),
            _ind(_D, "entities", weight=15),
            _ind(_D, "shared", weight=15),
            _ind(_D, "pages", weight=10),
            _ind(_D, "processes", weight=10),
        ),
    ),
    PatternDefinition(
        name="Layered",
        indicators=(
            _ind(_D, "domain", weight=25),
            _ind(_D, "infrastructure", "infra", weight=25),
            _ind(_D, "application", "services", "service", weight=20),
            _ind(_D, "presentation", "api", "ui", weight=15),
            _ind(_D, "repositories", "repository", "dal", "persistence", weight=15),
        ),
    ),
    PatternDefinition(
        name="Clean Architecture",
        indicators=(
            _ind(_D, "usecases", "use_cases", "use-cases", "interactors", weight=35),
            _ind(_D, "adapters", weight=25),
            _ind(_D, "ports", weight=25),
            _ind(_D, "entities", weight=15),
        ),
    ),
    PatternDefinition(
        name="Microservices",
        indicators=(
            _ind(IndicatorKind.MIN_FILE_COUNT, "Dockerfile", weight=35, min_count=2),
            _ind(_D, "services", "microservices", weight=25),
            _ind(
                IndicatorKind.FILE_NAME,
                "docker-compose.yml",
                "docker-compose.yaml",
                "compose.yml",
                "compose.yaml",
                weight=25,
            ),
            _ind(_D, "gateway", "api-gateway", weight=15),
        ),
    ),
    PatternDefinition(
        name="Component-Based",
        indicators=(
            _ind(_D, "components", weight=40),
            _ind(
                IndicatorKind.FRAMEWORK,
                "React",
                "Vue.js",
                "Angular",
                "Svelte",
                "Next.js",
                "Nuxt.js",
                weight=30,
            ),
            _ind(_D, "hooks", "composables", weight=20),
            _ind(IndicatorKind.FILE_SUFFIX, "component", weight=10),
        ),
    ),
)


class HeuristicsConfig(BaseModel):
    """Named, overridable heuristic constants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Technology profiling
    primary_language_threshold: float = Field(default=5.0, ge=0, le=100)
    manifest_confidence: float = Field(default=60.0, ge=0, le=100)
    marker_confidence: float = Field(default=90.0, ge=0, le=100)

    # Pattern profiling
    architecture_min_score: float = Field(default=20.0, ge=0, le=100)
    code_pattern_min_files: int = Field(default=2, ge=1)
    architecture_patterns: tuple[PatternDefinition, ...] = DEFAULT_ARCHITECTURE_PATTERNS

    # Dependency graph
    central_module_limit: int = Field(default=10, ge=0)
    max_cycles: int = Field(default=100, ge=1)
    hub_module_min_dependents: int = Field(default=3, ge=1)


def _merge_patterns(
    defaults: tuple[PatternDefinition, ...], overrides: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Replace patterns with the same name, append new ones (order preserved)."""
    merged = [p.model_dump() for p in defaults]
    index = {p["name"]: i for i, p in enumerate(merged)}
    for override in overrides:
        name = override.get("name")
        if name in index:
            merged[index[name]] = override
        else:
            index[name] = len(merged)
            merged.append(override)
    return merged


def load_heuristics(path: str | Path | None) -> HeuristicsConfig:
    """
    Load heuristics, merging a YAML override file over the defaults.

    Args:
        path: YAML file, or None for the defaults

    Returns:
        HeuristicsConfig

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid values
    """
    if path is None:
        return HeuristicsConfig()

    override_path = Path(path)
    try:
        data = yaml.safe_load(override_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read heuristics file: {override_path}", context={"error": str(e)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Heuristics file must contain a mapping: {override_path}")

    defaults = HeuristicsConfig()
    values = defaults.model_dump()
    values.update({k: v for k, v in data.items() if k != "architecture_patterns"})
    if "architecture_patterns" in data:
        overrides = data["architecture_patterns"] or []
        if not isinstance(overrides, list) or not all(
            isinstance(item, dict) and isinstance(item.get("name"), str) for item in overrides
        ):
            raise ConfigurationError(
                f"architecture_patterns must be a list of mappings with a name: {override_path}",
                context={"architecture_patterns": repr(overrides)},
            )
        values["architecture_patterns"] = _merge_patterns(defaults.architecture_patterns, overrides)

    try:
        config = HeuristicsConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid heuristics in {override_path}", context={"errors": e.errors()}
        ) from e

    logger.info("heuristics_loaded", path=str(override_path), overrides=sorted(data))
    return config
