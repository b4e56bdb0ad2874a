"""
Architecture pattern scoring.

Each PatternDefinition is a list of weighted indicators. A pattern's score is
the sum of the weights of its matched indicators, capped at 100. Weights are
never negative, so adding a matching indicator can never lower a score.
"""

from __future__ import annotations

from collections import defaultdict

import structlog

from projectlens.analysis.domain.heuristics import HeuristicsConfig, Indicator, IndicatorKind, PatternDefinition
from projectlens.analysis.domain.patterns import ArchitecturePatternResult
from projectlens.analysis.domain.structure import FileCategory, ProjectStructure
from projectlens.analysis.domain.tech_stack import TechStackProfile

logger = structlog.get_logger(__name__)

_CODE_CATEGORIES = (FileCategory.SOURCE, FileCategory.TEST)


class _StructureIndex:
    """Lowercase lookups over a ProjectStructure, built once per scoring run."""

    def __init__(self, structure: ProjectStructure):
        self.directory_names: set[str] = set()
        self.root_directory_names: set[str] = set()
        self.children_by_parent: dict[str, set[str]] = defaultdict(set)
        for directory in structure.directories:
            if directory.is_root:
                continue
            name = directory.name.lower()
            self.directory_names.add(name)
            if directory.depth == 1:
                self.root_directory_names.add(name)
            parent = directory.path.rsplit("/", 1)[0] if "/" in directory.path else "."
            self.children_by_parent[parent].add(name)

        self.file_name_counts: dict[str, int] = defaultdict(int)
        self.code_file_bases: list[str] = []
        for record in structure.files:
            self.file_name_counts[record.name.lower()] += 1
            if record.category in _CODE_CATEGORIES:
                base = record.name[: -len(record.extension)] if record.extension else record.name
                self.code_file_bases.append(base.lower())


class ArchitectureScorer:
    """Scores every configured architecture pattern against a project."""

    def __init__(self, heuristics: HeuristicsConfig | None = None):
        self.heuristics = heuristics or HeuristicsConfig()

    def score_all(
        self, structure: ProjectStructure, tech_stack: TechStackProfile | None = None
    ) -> list[ArchitecturePatternResult]:
        """Score of every pattern, in definition order."""
        index = _StructureIndex(structure)
        stack = tech_stack or TechStackProfile()
        return [self._score_pattern(pattern, index, stack) for pattern in self.heuristics.architecture_patterns]

    def detect(
        self, structure: ProjectStructure, tech_stack: TechStackProfile | None = None
    ) -> list[ArchitecturePatternResult]:
        """
        Patterns at or above the minimum score, ranked.

        Ranking is by score descending; equal scores keep definition order
        and every tied pattern is reported.
        """
        scored = self.score_all(structure, tech_stack)
        ranked = sorted(
            (pair for pair in enumerate(scored) if pair[1].score > 0),
            key=lambda pair: (-pair[1].score, pair[0]),
        )
        reported = [result for _, result in ranked if result.score >= self.heuristics.architecture_min_score]
        logger.debug(
            "architecture_patterns_scored",
            scores={r.name: r.score for r in scored},
            reported=[r.name for r in reported],
        )
        return reported

    def _score_pattern(
        self, pattern: PatternDefinition, index: _StructureIndex, stack: TechStackProfile
    ) -> ArchitecturePatternResult:
        score = 0.0
        evidence: list[str] = []
        for indicator in pattern.indicators:
            found = self._evaluate(indicator, index, stack)
            if found is not None:
                score += indicator.weight
                evidence.append(found)
        return ArchitecturePatternResult(name=pattern.name, score=min(100.0, score), evidence=tuple(evidence))

    def _evaluate(self, indicator: Indicator, index: _StructureIndex, stack: TechStackProfile) -> str | None:
        """Evidence string when the indicator matches, else None."""
        values = [v.lower() for v in indicator.values]
        kind = indicator.kind

        if kind == IndicatorKind.DIRECTORY:
            matched = sorted(v for v in values if v in index.directory_names)
            return f"directory {', '.join(m + '/' for m in matched)}" if matched else None

        if kind == IndicatorKind.ROOT_DIRECTORY:
            matched = sorted(v for v in values if v in index.root_directory_names)
            return f"top-level directory {', '.join(m + '/' for m in matched)}" if matched else None

        if kind == IndicatorKind.FILE_SUFFIX:
            for suffix in values:
                count = sum(1 for base in index.code_file_bases if base.endswith(suffix) and base != suffix)
                if count >= indicator.min_count:
                    return f"{count} files named *{suffix}"
            return None

        if kind == IndicatorKind.FILE_NAME:
            matched = sorted(v for v in values if index.file_name_counts.get(v, 0) > 0)
            return f"file {', '.join(matched)}" if matched else None

        if kind == IndicatorKind.MIN_FILE_COUNT:
            count = sum(index.file_name_counts.get(v, 0) for v in values)
            if count >= indicator.min_count:
                return f"{count} files named {' / '.join(indicator.values)}"
            return None

        if kind == IndicatorKind.COLOCATED_DIRECTORIES:
            groups = [set(group.split("|")) for group in values]
            for parent in sorted(index.children_by_parent):
                children = index.children_by_parent[parent]
                if all(group & children for group in groups):
                    location = "project root" if parent == "." else f"{parent}/"
                    return f"colocated under {location}"
            return None

        if kind == IndicatorKind.FRAMEWORK:
            detected = {name.lower(): name for name in stack.all_technologies}
            matched = sorted(detected[v] for v in values if v in detected)
            return f"framework {', '.join(matched)}" if matched else None

        return None
