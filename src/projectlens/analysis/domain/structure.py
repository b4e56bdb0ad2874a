"""
Project structure domain models.

Output of the traversal stage: every file and directory that survived
ignore filtering, classified and sorted by relative path.
"""

from __future__ import annotations

from enum import Enum
from posixpath import dirname

from pydantic import Field, model_validator

from projectlens.shared.domain.base_model import BaseDomainModel, FrozenMapping
from projectlens.shared.languages.definitions import CodeLanguage


class FileCategory(str, Enum):
    """Closed set of file categories."""

    SOURCE = "source"
    CONFIG = "config"
    DOCUMENTATION = "documentation"
    STYLESHEET = "stylesheet"
    TEST = "test"
    ASSET = "asset"
    BUILD_ARTIFACT = "build-artifact"
    OTHER = "other"

    @property
    def may_contain_code(self) -> bool:
        """Only these categories get a content sample."""
        return self in (FileCategory.SOURCE, FileCategory.TEST)


class FileRecord(BaseDomainModel):
    """
    A file discovered during traversal.

    relative_path is the unique key within a ProjectStructure.
    """

    path: str  # Absolute path
    relative_path: str  # POSIX path relative to project root
    name: str
    extension: str  # Lowercase, with leading dot; "" when absent
    category: FileCategory
    size_bytes: int = 0
    language: CodeLanguage = CodeLanguage.UNKNOWN
    content_sample: str | None = None  # First N bytes, source/test files only

    @property
    def parent(self) -> str:
        """Relative parent directory ("" for root-level files)."""
        return dirname(self.relative_path)

    @property
    def stem(self) -> str:
        """
        Base name before the first dot (leading dots ignored).

        Examples:
            user.service.ts -> user
            .eslintrc.js -> eslintrc
        """
        bare = self.name.lstrip(".")
        return bare.split(".", 1)[0] if bare else self.name

    @property
    def has_sample(self) -> bool:
        return bool(self.content_sample)


class DirectoryRecord(BaseDomainModel):
    """A directory that survived ignore filtering."""

    path: str  # Relative path; the root is "."
    depth: int  # 0 for the root
    children: tuple[str, ...] = ()  # Sorted relative paths of immediate children

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_root(self) -> bool:
        return self.path == "."


class ProjectStructure(BaseDomainModel):
    """
    Complete, deterministic view of a project tree.

    Files and directories are sorted by relative path.
    """

    root_path: str
    files: tuple[FileRecord, ...] = ()
    directories: tuple[DirectoryRecord, ...] = ()
    # category value -> count
    category_counts: FrozenMapping[str, int] = Field(default_factory=dict, validate_default=True)
    extensions: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_unique_paths(self) -> "ProjectStructure":
        paths = [f.relative_path for f in self.files]
        if len(paths) != len(set(paths)):
            raise ValueError("FileRecord relative paths must be unique")
        return self

    def get_file(self, relative_path: str) -> FileRecord | None:
        """Look up a file by its relative path."""
        return next((f for f in self.files if f.relative_path == relative_path), None)

    def files_in_category(self, category: FileCategory) -> list[FileRecord]:
        """Get all files of a specific category, in path order."""
        return [f for f in self.files if f.category == category]

    @property
    def source_files(self) -> list[FileRecord]:
        return self.files_in_category(FileCategory.SOURCE)

    def directory_names(self) -> set[str]:
        """Base names of all non-root directories."""
        return {d.name for d in self.directories if not d.is_root}

    @property
    def total_files(self) -> int:
        return len(self.files)
