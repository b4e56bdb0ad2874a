"""
Per-scan limits derived from Settings and the scan mode.
"""

from __future__ import annotations

from dataclasses import dataclass

from projectlens.analysis.domain.project_analysis import ScanMode
from projectlens.shared.domain.exceptions import InvalidInputError
from projectlens.shared.infrastructure.config import Settings


@dataclass(frozen=True)
class ScanOptions:
    """Resource limits for one analysis run."""

    mode: ScanMode = ScanMode.SHALLOW
    sample_bytes: int = 8_192
    sample_files: int = 50
    max_files_to_parse: int = 500
    max_sample_file_size: int = 1_048_576
    concurrency_limit: int = 8
    item_timeout: float = 30.0

    @classmethod
    def for_mode(cls, mode: ScanMode | str, settings: Settings) -> "ScanOptions":
        """
        Build options for a scan mode.

        Raises:
            InvalidInputError: If mode is not a known ScanMode
        """
        try:
            scan_mode = ScanMode(mode)
        except ValueError as e:
            raise InvalidInputError(f"Unknown scan mode: {mode}", context={"allowed": [m.value for m in ScanMode]}) from e

        deep = scan_mode == ScanMode.DEEP
        return cls(
            mode=scan_mode,
            sample_bytes=settings.deep_sample_bytes if deep else settings.shallow_sample_bytes,
            sample_files=settings.deep_sample_files if deep else settings.shallow_sample_files,
            max_files_to_parse=settings.deep_max_files_to_parse if deep else settings.shallow_max_files_to_parse,
            max_sample_file_size=settings.max_sample_file_size,
            concurrency_limit=settings.concurrency_limit,
            item_timeout=settings.item_timeout,
        )
