"""
Analysis result cache.

A bounded, thread-safe LRU of ProjectAnalysis records keyed by
``(project root, content fingerprint)``. The fingerprint changes whenever a
file is added, removed or resized, its sampled content changes, a dependency
manifest is edited in place, or the scan mode or ignore patterns differ.

The cache is an explicit object handed to ProjectAnalyzer; nothing is cached
process-wide.
"""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from collections.abc import Iterable

import structlog

from projectlens.analysis.application.technology.manifests import get_manifest_parser
from projectlens.analysis.domain.project_analysis import ProjectAnalysis, ScanMode
from projectlens.analysis.domain.structure import FileRecord, ProjectStructure

logger = structlog.get_logger(__name__)

CacheKey = tuple[str, str]


def _content_hash(record: FileRecord) -> str:
    """
    Hash of what the analysis reads from a file.

    Manifests are parsed in full, so their whole content is hashed; other
    files only contribute their sample.
    """
    if get_manifest_parser(record.name) is not None:
        try:
            with open(record.path, "rb") as handle:
                return hashlib.sha256(handle.read()).hexdigest()
        except OSError:
            return "-"
    if record.content_sample is None:
        return "-"
    return hashlib.sha256(record.content_sample.encode("utf-8")).hexdigest()


def compute_fingerprint(
    structure: ProjectStructure, mode: ScanMode, ignore_patterns: Iterable[str] = ()
) -> str:
    """
    SHA-256 over relative paths, sizes and content hashes plus scan settings.

    Files are visited in their (sorted) structure order, so the fingerprint
    does not depend on traversal scheduling.
    """
    digest = hashlib.sha256()
    digest.update(f"mode={ScanMode(mode).value}\n".encode())
    for pattern in ignore_patterns:
        digest.update(f"ignore={pattern}\n".encode())
    for record in structure.files:
        digest.update(f"{record.relative_path}\0{record.size_bytes}\0{_content_hash(record)}\n".encode())
    return digest.hexdigest()


class AnalysisCache:
    """
    LRU cache of analysis results.

    Examples:
        >>> cache = AnalysisCache(max_entries=2)
        >>> cache.get("/repo", "abc") is None
        True
    """

    def __init__(self, max_entries: int = 32) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._data: OrderedDict[CacheKey, ProjectAnalysis] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, root: str, fingerprint: str) -> ProjectAnalysis | None:
        """Cached analysis for root at this fingerprint (promoted on hit)."""
        key = (root, fingerprint)
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                self.hits += 1
                logger.debug("analysis_cache_hit", root=root)
                return self._data[key]
            self.misses += 1
            return None

    def put(self, root: str, fingerprint: str, analysis: ProjectAnalysis) -> None:
        key = (root, fingerprint)
        with self._lock:
            self._data[key] = analysis
            self._data.move_to_end(key)
            if len(self._data) > self._max_entries:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("analysis_cache_evicted", root=evicted[0])

    def invalidate(self, root: str) -> int:
        """Drop every entry of one project root. Returns the number removed."""
        with self._lock:
            stale = [key for key in self._data if key[0] == root]
            for key in stale:
                del self._data[key]
        if stale:
            logger.debug("analysis_cache_invalidated", root=root, entries=len(stale))
        return len(stale)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._data.clear()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        with self._lock:
            return f"AnalysisCache(max_entries={self._max_entries}, len={len(self._data)})"
