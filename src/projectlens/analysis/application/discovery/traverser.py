"""
Project tree traverser.

Walks a project directory with an explicit work queue, filters entries with
gitignore-style patterns before anything is classified or read, and builds a
deterministic ProjectStructure.
"""

from __future__ import annotations

import asyncio
import os
import time
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from projectlens.analysis.application.discovery.classifier import FileClassifier
from projectlens.analysis.application.options import ScanOptions
from projectlens.analysis.domain.project_analysis import AnalysisStage, Diagnostic, DiagnosticKind
from projectlens.analysis.domain.structure import DirectoryRecord, FileRecord, ProjectStructure
from projectlens.shared.infrastructure.ignore_matcher import IgnoreMatcher
from projectlens.shared.infrastructure.parallel import CancellationToken, ParallelBatchExecutor

logger = structlog.get_logger(__name__)


@dataclass
class TraversalResult:
    """Structure plus the non-fatal issues met while building it."""

    structure: ProjectStructure
    diagnostics: list[Diagnostic] = field(default_factory=list)
    truncated: bool = False


@dataclass(frozen=True)
class _FileEntry:
    relative_path: str
    path: str


@dataclass
class _WalkOutcome:
    files: list[_FileEntry] = field(default_factory=list)
    directories: dict[str, int] = field(default_factory=dict)  # relative path -> depth
    diagnostics: list[Diagnostic] = field(default_factory=list)
    cancelled: bool = False


def _inaccessible(path: str, message: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.INACCESSIBLE_PATH,
        stage=AnalysisStage.TRAVERSAL,
        message=message,
        path=path,
    )


def _join(parent: str, name: str) -> str:
    return name if parent == "." else f"{parent}/{name}"


def read_sample(path: str, sample_bytes: int) -> str | None:
    """
    Read the first sample_bytes of a file as text.

    Returns None for binary content (a NUL byte in the chunk).
    """
    with open(path, "rb") as handle:
        chunk = handle.read(sample_bytes)
    if b"\x00" in chunk:
        return None
    return chunk.decode("utf-8", errors="replace")


class FileTraverser:
    """
    Builds a ProjectStructure from a directory tree.

    Symlinked directories are not followed. Unreadable directories and
    broken symlinks are skipped and reported as diagnostics.
    """

    def __init__(
        self,
        root_path: str | Path,
        ignore_patterns: list[str] | tuple[str, ...] = (),
        options: ScanOptions | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        """
        Initialize the traverser.

        Args:
            root_path: Project root directory
            ignore_patterns: Ordered gitignore-style patterns
            options: Scan limits (sample size, worker pool)
            cancel_token: Optional caller-controlled cancellation

        Examples:
            >>> traverser = FileTraverser("/path/to/project", ["dist/", "*.log"])
            >>> result = await traverser.traverse_async()
        """
        self.root_path = Path(root_path).resolve()
        self.options = options or ScanOptions()
        self.matcher = IgnoreMatcher(ignore_patterns)
        self.cancel_token = cancel_token
        self.executor = ParallelBatchExecutor(
            concurrency_limit=self.options.concurrency_limit,
            item_timeout=self.options.item_timeout,
            cancel_token=cancel_token,
        )

    @property
    def _cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.is_cancelled

    async def traverse_async(self) -> TraversalResult:
        """
        Walk, filter, classify and sample the project tree.

        Returns:
            TraversalResult with files and directories sorted by relative path
        """
        start_time = time.time()
        walk = await asyncio.to_thread(self._walk)

        batch = await self.executor.execute_batch(walk.files, self._process_entry, batch_name="traversal")

        diagnostics = list(walk.diagnostics)
        records: list[FileRecord] = []
        for outcome in batch.results:
            if outcome is None:
                continue
            record, diagnostic = outcome
            records.append(record)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        for index, error in batch.failures:
            diagnostics.append(_inaccessible(walk.files[index].relative_path, f"Cannot stat file: {error}"))

        truncated = walk.cancelled or batch.truncated
        if truncated:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.CANCELLED,
                    stage=AnalysisStage.TRAVERSAL,
                    message="Traversal cancelled; structure is partial",
                )
            )

        structure = self._build_structure(records, walk.directories)

        logger.info(
            "traversal_completed",
            root=str(self.root_path),
            files=structure.total_files,
            directories=len(structure.directories),
            diagnostics=len(diagnostics),
            truncated=truncated,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return TraversalResult(structure=structure, diagnostics=diagnostics, truncated=truncated)

    def traverse(self) -> TraversalResult:
        """Synchronous wrapper around traverse_async()."""
        return asyncio.run(self.traverse_async())

    def _walk(self) -> _WalkOutcome:
        """Breadth-first walk; ignored directories are never entered."""
        outcome = _WalkOutcome(directories={".": 0})
        pending: deque[tuple[str, Path, int]] = deque([(".", self.root_path, 0)])

        while pending:
            if self._cancelled:
                outcome.cancelled = True
                logger.warning("traversal_cancelled", pending_directories=len(pending))
                break

            rel_dir, abs_dir, depth = pending.popleft()
            try:
                with os.scandir(abs_dir) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                logger.warning("directory_unreadable", path=str(abs_dir), error=str(e))
                outcome.diagnostics.append(_inaccessible(rel_dir, f"Cannot read directory: {e.strerror or e}"))
                continue

            for entry in entries:
                rel_path = _join(rel_dir, entry.name)
                try:
                    if entry.is_symlink():
                        if not os.path.exists(entry.path):
                            if not self.matcher.should_ignore_entry(rel_path, False):
                                outcome.diagnostics.append(_inaccessible(rel_path, "Broken symbolic link"))
                            continue
                        if entry.is_dir(follow_symlinks=True):
                            logger.debug("symlinked_directory_skipped", path=rel_path)
                            continue
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    outcome.diagnostics.append(_inaccessible(rel_path, f"Cannot inspect entry: {e}"))
                    continue

                if self.matcher.should_ignore_entry(rel_path, is_dir):
                    continue

                if is_dir:
                    outcome.directories[rel_path] = depth + 1
                    pending.append((rel_path, Path(entry.path), depth + 1))
                elif entry.is_file():
                    outcome.files.append(_FileEntry(relative_path=rel_path, path=entry.path))

        return outcome

    async def _process_entry(self, entry: _FileEntry) -> tuple[FileRecord, Diagnostic | None]:
        return await asyncio.to_thread(self._build_record, entry)

    def _build_record(self, entry: _FileEntry) -> tuple[FileRecord, Diagnostic | None]:
        """Stat, classify and (for code files) sample one file."""
        size = os.stat(entry.path).st_size
        name = entry.relative_path.rsplit("/", 1)[-1]
        category = FileClassifier.classify(entry.relative_path)

        sample: str | None = None
        diagnostic: Diagnostic | None = None
        if category.may_contain_code and size <= self.options.max_sample_file_size and self.options.sample_bytes > 0:
            try:
                sample = read_sample(entry.path, self.options.sample_bytes)
            except OSError as e:
                logger.warning("file_sample_failed", path=entry.relative_path, error=str(e))
                diagnostic = _inaccessible(entry.relative_path, f"Cannot read file: {e.strerror or e}")

        record = FileRecord(
            path=entry.path,
            relative_path=entry.relative_path,
            name=name,
            extension=FileClassifier.get_extension(name),
            category=category,
            size_bytes=size,
            language=FileClassifier.get_language(name),
            content_sample=sample,
        )
        return record, diagnostic

    def _build_structure(self, records: list[FileRecord], directories: dict[str, int]) -> ProjectStructure:
        """Single-threaded reduce of per-file results into a sorted structure."""
        files = sorted(records, key=lambda f: f.relative_path)

        children: dict[str, list[str]] = {path: [] for path in directories}
        for path in directories:
            if path != ".":
                parent = path.rsplit("/", 1)[0] if "/" in path else "."
                children[parent].append(path)
        for record in files:
            parent = record.parent or "."
            children.setdefault(parent, []).append(record.relative_path)

        directory_records = tuple(
            DirectoryRecord(path=path, depth=directories[path], children=tuple(sorted(children[path])))
            for path in sorted(directories)
        )

        counts: dict[str, int] = {}
        for record in files:
            counts[record.category.value] = counts.get(record.category.value, 0) + 1

        return ProjectStructure(
            root_path=str(self.root_path),
            files=tuple(files),
            directories=directory_records,
            category_counts={key: counts[key] for key in sorted(counts)},
            extensions=tuple(sorted({f.extension for f in files if f.extension})),
        )

