"""
Unit tests for manifest parsers and the dependency catalog.
"""

import pytest

from projectlens.analysis.application.technology.catalog import detect_stacks, match_dependency
from projectlens.analysis.application.technology.manifests import (
    ManifestParseError,
    get_manifest_parser,
    parse_build_gradle,
    parse_go_mod,
    parse_package_json,
    parse_pom_xml,
    parse_pubspec_yaml,
    parse_pyproject_toml,
    parse_requirements_txt,
)


class TestManifestParsers:
    """Test dependency extraction per ecosystem."""

    def test_package_json_sections(self) -> None:
        text = '{"dependencies": {"react": "1"}, "devDependencies": {"jest": "1"}, "peerDependencies": {"vue": "3"}}'
        assert parse_package_json(text) == ["react", "jest", "vue"]

    def test_package_json_rejects_non_object(self) -> None:
        with pytest.raises(ManifestParseError):
            parse_package_json("[1, 2]")

    def test_requirements_skips_options_and_urls(self) -> None:
        text = "-r base.txt\nDjango>=4.2  # web\n\ngit+https://example.com/x.git\nrequests[socks]==2.31\n"
        assert parse_requirements_txt(text) == ["Django", "requests"]

    def test_pyproject_pep621_and_poetry(self) -> None:
        text = (
            "[build-system]\nrequires = ['setuptools>=61']\n"
            "[project]\ndependencies = ['fastapi>=0.100', 'sqlalchemy']\n"
            "[project.optional-dependencies]\ntest = ['pytest']\n"
            "[tool.poetry.dependencies]\npython = '^3.11'\nrich = '*'\n"
        )
        assert parse_pyproject_toml(text) == ["fastapi", "sqlalchemy", "pytest", "rich", "setuptools"]

    def test_invalid_toml(self) -> None:
        with pytest.raises(ManifestParseError):
            parse_pyproject_toml("[project\n")

    def test_go_mod_single_and_block(self) -> None:
        text = (
            "module example.com/app\n\ngo 1.21\n\n"
            "require github.com/spf13/cobra v1.8.0\n"
            "require (\n\tgithub.com/gin-gonic/gin v1.9.1 // indirect\n\tgorm.io/gorm v1.25.0\n)\n"
        )
        assert parse_go_mod(text) == ["github.com/spf13/cobra", "github.com/gin-gonic/gin", "gorm.io/gorm"]

    def test_go_mod_unterminated_block(self) -> None:
        with pytest.raises(ManifestParseError):
            parse_go_mod("require (\n\tgorm.io/gorm v1.25.0\n")

    def test_pom_xml_with_namespace(self) -> None:
        text = (
            '<project xmlns="http://maven.apache.org/POM/4.0.0">'
            "<parent><groupId>org.springframework.boot</groupId><artifactId>parent</artifactId></parent>"
            "<dependencies><dependency><groupId>org.junit</groupId><artifactId>junit-jupiter</artifactId>"
            "</dependency></dependencies></project>"
        )
        assert parse_pom_xml(text) == ["org.springframework.boot:parent", "org.junit:junit-jupiter"]

    def test_build_gradle_coordinates_and_plugins(self) -> None:
        text = "plugins { id 'org.springframework.boot' }\ndependencies { implementation 'io.ktor:ktor-server:2.3' }\n"
        assert parse_build_gradle(text) == ["io.ktor:ktor-server", "org.springframework.boot"]

    def test_pubspec_yaml(self) -> None:
        text = "dependencies:\n  flutter:\n    sdk: flutter\n  provider: ^6.0.0\ndev_dependencies:\n  flutter_test: {}\n"
        assert parse_pubspec_yaml(text) == ["flutter", "provider", "flutter_test"]

    def test_parser_lookup(self) -> None:
        assert get_manifest_parser("Cargo.toml").ecosystem == "cargo"
        assert get_manifest_parser("requirements-dev.txt").ecosystem == "pypi"
        assert get_manifest_parser("package-lock.json") is None


class TestCatalog:
    """Test dependency matching and stack detection."""

    def test_exact_before_prefix(self) -> None:
        assert match_dependency("maven", "org.springframework.boot:spring-boot-starter").name == "Spring Boot"
        assert match_dependency("maven", "org.springframework:spring-core").name == "Spring"

    def test_pypi_names_are_normalized(self) -> None:
        assert match_dependency("pypi", "Scikit_Learn").name == "scikit-learn"
        assert match_dependency("pypi", "pytest-asyncio").name == "pytest"

    def test_unknown_dependency(self) -> None:
        assert match_dependency("npm", "left-pad") is None
        assert match_dependency("unknown", "react") is None

    def test_stacks_require_every_member(self) -> None:
        assert detect_stacks({"MongoDB", "Express", "React"}) == ["MERN"]
        assert detect_stacks({"Next.js", "tRPC", "Tailwind CSS", "Drizzle"}) == ["T3 Stack"]
        assert detect_stacks({"Express", "React"}) == []
