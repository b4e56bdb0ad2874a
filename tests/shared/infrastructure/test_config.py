"""
Unit tests for Settings and ScanOptions.
"""

import pytest
from pydantic import ValidationError

from projectlens.analysis.application.options import ScanOptions
from projectlens.analysis.domain.project_analysis import ScanMode
from projectlens.shared.domain.exceptions import InvalidInputError
from projectlens.shared.infrastructure.config import Settings


class TestSettings:
    """Test environment loading and validation."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.default_ignore_patterns == [".git/", "node_modules/"]
        assert settings.concurrency_limit == 8
        assert settings.heuristics_file is None

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("PROJECTLENS_CONCURRENCY_LIMIT", "2")
        monkeypatch.setenv("PROJECTLENS_APP_ENV", "production")

        settings = Settings()

        assert settings.concurrency_limit == 2
        assert settings.is_production

    def test_deep_limits_must_not_be_smaller(self) -> None:
        with pytest.raises(ValidationError):
            Settings(shallow_sample_files=80, deep_sample_files=10)


class TestScanOptions:
    """Test per-mode limits."""

    def test_shallow_and_deep(self) -> None:
        settings = Settings()
        shallow = ScanOptions.for_mode(ScanMode.SHALLOW, settings)
        deep = ScanOptions.for_mode("deep", settings)

        assert shallow.sample_files == 50
        assert deep.sample_files == 100
        assert deep.max_files_to_parse > shallow.max_files_to_parse

    def test_unknown_mode(self) -> None:
        with pytest.raises(InvalidInputError):
            ScanOptions.for_mode("quick", Settings())
