"""
Naming convention detection.

Identifiers are classified with character-class predicates rather than one
monolithic regex per style. An identifier may satisfy several styles
("user" is valid camelCase, snake_case and kebab-case); the first satisfied
style in STYLE_PRIORITY wins.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional

from projectlens.analysis.domain.patterns import (
    STYLE_PRIORITY,
    IdentifierCategory,
    NamingConventionResult,
    NamingStyle,
)
from projectlens.shared.utils.score_utils import percentage

_DUNDER = re.compile(r"^__\w+__$")


def _is_alnum_ascii(text: str) -> bool:
    return text.isascii() and text.isalnum()


def _only(text: str, allowed_separator: str) -> bool:
    """Alphanumeric runs joined by single separator characters."""
    parts = text.split(allowed_separator)
    return all(parts) and all(_is_alnum_ascii(p) for p in parts)


def satisfied_styles(identifier: str) -> set[NamingStyle]:
    """
    All styles an identifier satisfies (leading '_'/'$' already stripped).

    Examples:
        >>> sorted(s.value for s in satisfied_styles("user"))
        ['camelCase', 'kebab-case', 'snake_case']
    """
    if not identifier:
        return set()

    first = identifier[0]
    has_lower = any(c.islower() for c in identifier)
    has_upper = any(c.isupper() for c in identifier)
    styles: set[NamingStyle] = set()

    if _is_alnum_ascii(identifier):
        if first.islower():
            styles.add(NamingStyle.CAMEL_CASE)
        elif first.isupper() and has_lower:
            styles.add(NamingStyle.PASCAL_CASE)

    if first.isalpha() and not has_upper and _only(identifier, "_"):
        styles.add(NamingStyle.SNAKE_CASE)
    if first.isalpha() and not has_upper and _only(identifier, "-"):
        styles.add(NamingStyle.KEBAB_CASE)
    if first.isalpha() and not has_lower and _only(identifier, "_"):
        styles.add(NamingStyle.SCREAMING_SNAKE_CASE)

    return styles


def normalize_identifier(identifier: str) -> Optional[str]:
    """
    Strip decoration that carries no style information.

    Returns None for identifiers that are skipped entirely (dunders, "_").
    """
    if _DUNDER.match(identifier):
        return None
    stripped = identifier.lstrip("_$").rstrip("_")
    return stripped or None


def classify_identifier(identifier: str) -> Optional[NamingStyle]:
    """
    Classify one identifier into a naming style bucket.

    Returns:
        NamingStyle (UNRECOGNIZED when no style fits), or None when skipped

    Examples:
        >>> classify_identifier("getUserName")
        <NamingStyle.CAMEL_CASE: 'camelCase'>
        >>> classify_identifier("MAX_RETRIES")
        <NamingStyle.SCREAMING_SNAKE_CASE: 'SCREAMING_SNAKE_CASE'>
        >>> classify_identifier("__init__") is None
        True
    """
    normalized = normalize_identifier(identifier)
    if normalized is None:
        return None
    styles = satisfied_styles(normalized)
    for style in STYLE_PRIORITY:
        if style in styles:
            return style
    return NamingStyle.UNRECOGNIZED


class NamingConventionDetector:
    """Aggregates identifier observations into per-category results."""

    def analyze(self, category: IdentifierCategory, identifiers: Iterable[str]) -> NamingConventionResult:
        """
        Determine the dominant style of one identifier category.

        The dominant style is the recognized bucket with the highest count,
        ties broken by STYLE_PRIORITY. Confidence is that count over every
        classified identifier (unrecognized ones included).
        """
        counts: Counter[NamingStyle] = Counter()
        members: dict[NamingStyle, Counter[str]] = {}
        for identifier in identifiers:
            style = classify_identifier(identifier)
            if style is None:
                continue
            counts[style] += 1
            members.setdefault(style, Counter())[identifier] += 1

        total = sum(counts.values())
        if total == 0:
            return NamingConventionResult(category=category)

        recognized = [s for s in STYLE_PRIORITY if counts[s] > 0]
        if recognized:
            dominant = max(recognized, key=lambda s: (counts[s], -STYLE_PRIORITY.index(s)))
        else:
            dominant = NamingStyle.UNRECOGNIZED

        example = min(members[dominant].items(), key=lambda item: (-item[1], item[0]))[0]

        return NamingConventionResult(
            category=category,
            dominant_style=dominant,
            confidence=percentage(counts[dominant], total),
            example=example,
            total=total,
            distribution={style.value: counts[style] for style in sorted(counts, key=lambda s: s.value)},
        )
