"""
Unit tests for FileClassifier.

Tests name rules, build output locations, test shapes and the extension table.
"""

import pytest

from projectlens.analysis.application.discovery.classifier import FileClassifier
from projectlens.analysis.domain.structure import FileCategory
from projectlens.shared.languages.definitions import CodeLanguage


class TestFileClassifier:
    """Test FileClassifier functionality."""

    @pytest.mark.parametrize(
        "path",
        ["src/main.py", "app/models/user.rb", "cmd/server/main.go", "src/App.tsx", "lib/util.c", "manage.py"],
    )
    def test_classify_source_files(self, path: str) -> None:
        """Code files outside test locations are source."""
        assert FileClassifier.classify(path) == FileCategory.SOURCE

    @pytest.mark.parametrize(
        "path",
        [
            "package.json",
            "pyproject.toml",
            "Dockerfile",
            "requirements-dev.txt",
            "vite.config.ts",
            ".eslintrc.js",
            "docker-compose.prod.yml",
            "config/settings.yaml",
        ],
    )
    def test_classify_config_files(self, path: str) -> None:
        """Manifests, tool configs and data files are config."""
        assert FileClassifier.classify(path) == FileCategory.CONFIG

    @pytest.mark.parametrize(
        "path",
        [
            "tests/test_api.py",
            "pkg/handler_test.go",
            "src/app.test.ts",
            "src/Button.spec.tsx",
            "spec/user_spec.rb",
            "src/test/java/UserServiceTest.java",
            "__tests__/helpers.js",
        ],
    )
    def test_classify_test_files(self, path: str) -> None:
        """Test name shapes and code in test directories are tests."""
        assert FileClassifier.classify(path) == FileCategory.TEST

    def test_non_code_in_test_directory_keeps_its_category(self) -> None:
        """Fixtures in a tests/ directory are not tests."""
        assert FileClassifier.classify("tests/fixtures/data.json") == FileCategory.CONFIG

    @pytest.mark.parametrize(
        "path,category",
        [
            ("README.md", FileCategory.DOCUMENTATION),
            ("LICENSE", FileCategory.DOCUMENTATION),
            ("docs/guide.rst", FileCategory.DOCUMENTATION),
            ("src/styles/main.scss", FileCategory.STYLESHEET),
            ("public/logo.svg", FileCategory.ASSET),
            ("fonts/inter.woff2", FileCategory.ASSET),
            ("dist/bundle.js", FileCategory.BUILD_ARTIFACT),
            ("src/__pycache__/mod.cpython-311.pyc", FileCategory.BUILD_ARTIFACT),
            ("static/vendor.min.js", FileCategory.BUILD_ARTIFACT),
            ("data/blob.bin", FileCategory.OTHER),
            ("Notes", FileCategory.OTHER),
        ],
    )
    def test_classify_other_categories(self, path: str, category: FileCategory) -> None:
        """Extension table and location rules."""
        assert FileClassifier.classify(path) == category

    def test_classification_is_case_insensitive(self) -> None:
        """Upper-case names and extensions classify like lower-case ones."""
        assert FileClassifier.classify("SRC/MAIN.PY") == FileCategory.SOURCE
        assert FileClassifier.classify("Makefile") == FileCategory.CONFIG


class TestExtensionsAndLanguages:
    """Test extension and language helpers."""

    def test_get_extension(self) -> None:
        """Extensions are lowercase with a dot; dotfiles have none."""
        assert FileClassifier.get_extension("App.TSX") == ".tsx"
        assert FileClassifier.get_extension("archive.tar.gz") == ".gz"
        assert FileClassifier.get_extension(".gitignore") == ""
        assert FileClassifier.get_extension("Makefile") == ""
        assert FileClassifier.get_extension(".eslintrc.json") == ".json"

    def test_get_language(self) -> None:
        """Languages are inferred from the extension."""
        assert FileClassifier.get_language("main.py") == CodeLanguage.PYTHON
        assert FileClassifier.get_language("index.mjs") == CodeLanguage.JAVASCRIPT
        assert FileClassifier.get_language("App.vue") == CodeLanguage.VUE
        assert FileClassifier.get_language("README.md") == CodeLanguage.UNKNOWN

    def test_supported_extensions_cover_code_and_data(self) -> None:
        """The supported set includes both code and non-code extensions."""
        supported = FileClassifier.get_supported_extensions()
        assert {".py", ".ts", ".json", ".css", ".png"} <= supported
