"""
Ignore Matcher - Pattern Matching for File Exclusions.

Applies an ordered list of gitignore-style patterns to paths relative to the
project root:
- '!' negation (the last matching pattern wins)
- directory-only patterns ending in '/'
- anchored patterns (containing a '/') vs. base-name patterns
- '*', '?', '[...]' and '**' globs

A path under an excluded directory stays excluded: like git, the traversal
never descends into it, so a later negation cannot re-include its contents.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable

from projectlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IgnoreRule:
    """A single compiled ignore pattern."""

    pattern: str  # Original pattern line
    regex: re.Pattern
    negated: bool
    dir_only: bool
    anchored: bool  # Matched against the full relative path, not the base name

    def matches(self, rel_path: str, name: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return self.regex.match(rel_path if self.anchored else name) is not None


def _translate_glob(glob: str) -> str:
    """
    Translate a gitignore glob (without negation/trailing slash) into a regex body.

    Examples:
        >>> _translate_glob("*.log")
        '[^/]*\\\\.log'
    """
    out: list[str] = []
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        if c == "*":
            if glob.startswith("**", i):
                at_segment_start = i == 0 or glob[i - 1] == "/"
                j = i + 2
                if at_segment_start and j < n and glob[j] == "/":
                    out.append("(?:.*/)?")
                    i = j + 1
                    continue
                if at_segment_start and j == n:
                    out.append(".*")
                    i = j
                    continue
                out.append("[^/]*")
                i = j
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i + 1
            if j < n and glob[j] in "!^":
                j += 1
            if j < n and glob[j] == "]":
                j += 1
            while j < n and glob[j] != "]":
                j += 1
            if j >= n:
                out.append(re.escape(c))
            else:
                body = glob[i + 1 : j]
                if body[0] in "!^":
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = j + 1
                continue
        elif c == "\\" and i + 1 < n:
            out.append(re.escape(glob[i + 1]))
            i += 2
            continue
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def compile_pattern(line: str) -> IgnoreRule | None:
    """
    Compile one gitignore line.

    Returns:
        IgnoreRule, or None for blank lines and comments
    """
    raw = line.rstrip("\r\n")
    # Trailing spaces are ignored unless escaped with a backslash
    if raw.endswith("\\ "):
        raw = raw.rstrip(" ") + " "
    else:
        raw = raw.rstrip(" ")

    if not raw.strip() or raw.startswith("#"):
        return None

    negated = False
    body = raw
    if body.startswith("!"):
        negated = True
        body = body[1:]
    elif body.startswith("\\!") or body.startswith("\\#"):
        body = body[1:]

    dir_only = body.endswith("/")
    body = body.rstrip("/")
    if not body:
        return None

    anchored = "/" in body
    if body.startswith("/"):
        body = body[1:]

    regex = re.compile("^" + _translate_glob(body) + "$")
    return IgnoreRule(pattern=raw, regex=regex, negated=negated, dir_only=dir_only, anchored=anchored)


def read_gitignore(project_root: Path) -> list[str]:
    """
    Read pattern lines from the root .gitignore.

    Returns an empty list when the file is missing or unreadable.
    """
    gitignore_file = project_root / ".gitignore"
    if not gitignore_file.is_file():
        return []

    try:
        lines = gitignore_file.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as e:
        logger.warning("gitignore_load_failed", path=str(gitignore_file), error=str(e))
        return []

    logger.debug("gitignore_patterns_loaded", count=len(lines))
    return lines


class IgnoreMatcher:
    """
    Matcher for an ordered list of gitignore-style patterns.

    Paths are always POSIX-style and relative to the project root.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        """
        Initialize ignore matcher.

        Args:
            patterns: Ordered gitignore lines; later patterns override earlier ones
        """
        self._rules: list[IgnoreRule] = []
        for line in patterns:
            rule = compile_pattern(line)
            if rule is not None:
                self._rules.append(rule)

        logger.debug(
            "ignore_patterns_compiled",
            rules=len(self._rules),
            negations=sum(1 for r in self._rules if r.negated),
        )

    @property
    def patterns(self) -> list[str]:
        """Active pattern lines, in evaluation order."""
        return [rule.pattern for rule in self._rules]

    def _evaluate(self, rel_path: str, is_dir: bool) -> bool | None:
        """Outcome of the last matching rule for this exact path, or None."""
        name = rel_path.rsplit("/", 1)[-1]
        outcome: bool | None = None
        for rule in self._rules:
            if rule.matches(rel_path, name, is_dir):
                outcome = not rule.negated
        return outcome

    def should_ignore_entry(self, rel_path: str, is_dir: bool) -> bool:
        """
        Check a single entry whose parent directories are known to be included.

        Used by the traversal, which never descends into ignored directories.
        """
        return bool(self._evaluate(_normalize(rel_path), is_dir))

    def should_ignore_directory(self, rel_path: str) -> bool:
        """Check if a directory (and therefore everything beneath it) is ignored."""
        return self.should_ignore_path(rel_path, is_dir=True)

    def should_ignore_path(self, rel_path: str | PurePosixPath, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored, including via an excluded ancestor.

        Args:
            rel_path: Path relative to the project root
            is_dir: Whether the path is a directory

        Returns:
            True if the path is excluded
        """
        rel = _normalize(str(rel_path))
        if not rel or rel == ".":
            return False

        parts = rel.split("/")
        for index in range(1, len(parts)):
            if self._evaluate("/".join(parts[:index]), True):
                return True

        return bool(self._evaluate(rel, is_dir))


def _normalize(rel_path: str) -> str:
    rel = rel_path.replace("\\", "/").strip("/")
    while rel.startswith("./"):
        rel = rel[2:]
    return rel
