"""
Unit tests for import specifier resolution.
"""

import pytest

from projectlens.analysis.application.dependencies.resolver import ModuleResolver, node_id
from projectlens.analysis.application.patterns.extractors import ImportReference
from projectlens.analysis.domain.dependency_graph import EdgeKind


def resolve(structure, importer_path, specifier, names=()):
    resolver = ModuleResolver(structure)
    importer = structure.get_file(importer_path)
    return resolver.resolve(importer, ImportReference(specifier, EdgeKind.STATIC_IMPORT, tuple(names)))


@pytest.mark.parametrize(
    "path,expected",
    [
        ("src/utils/format.ts", "src/utils/format"),
        ("app/__init__.py", "app/__init__"),
        ("Makefile", "Makefile"),
        (".eslintrc", ".eslintrc"),
        ("src/.env.local", "src/.env"),
    ],
)
def test_node_id_strips_extension(path, expected) -> None:
    """Node ids are relative paths without their last extension."""
    assert node_id(path) == expected


class TestJavaScriptResolution:
    """Test relative, alias and index resolution."""

    def test_relative_imports(self, react_project, scan) -> None:
        structure = scan(react_project, ["node_modules/", "dist/"])
        assert resolve(structure, "src/index.ts", "./server") == ["src/server"]
        assert resolve(structure, "src/components/ProductCard.tsx", "../utils/format") == ["src/utils/format"]

    def test_packages_are_dropped(self, react_project, scan) -> None:
        structure = scan(react_project, ["node_modules/", "dist/"])
        assert resolve(structure, "src/server.ts", "express") == []

    def test_alias_and_directory_index(self, make_tree, scan) -> None:
        root = make_tree(
            {
                "src/app.ts": "",
                "src/utils/format.ts": "",
                "src/components/index.ts": "",
            }
        )
        structure = scan(root)
        assert resolve(structure, "src/app.ts", "@/utils/format") == ["src/utils/format"]
        assert resolve(structure, "src/app.ts", "./components") == ["src/components/index"]

    def test_escaping_root_and_self_reference(self, make_tree, scan) -> None:
        root = make_tree({"src/index.ts": ""})
        structure = scan(root)
        assert resolve(structure, "src/index.ts", "../../outside") == []
        assert resolve(structure, "src/index.ts", "./index") == []


class TestPythonResolution:
    """Test absolute, relative and from-import resolution."""

    @pytest.fixture
    def structure(self, make_tree, scan):
        root = make_tree(
            {
                "app/__init__.py": "",
                "app/core/config.py": "",
                "app/services/user.py": "",
                "app/main.py": "",
            }
        )
        return scan(root)

    def test_relative_from_import(self, structure) -> None:
        assert resolve(structure, "app/services/user.py", "..core.config", ["Settings"]) == ["app/core/config"]

    def test_from_import_of_submodule(self, structure) -> None:
        assert resolve(structure, "app/main.py", "app.services", ["user"]) == ["app/services/user"]

    def test_dotted_import(self, structure) -> None:
        assert resolve(structure, "app/main.py", "app.core.config") == ["app/core/config"]
        assert resolve(structure, "app/main.py", "app") == ["app/__init__"]

    def test_third_party_is_dropped(self, structure) -> None:
        assert resolve(structure, "app/main.py", "requests") == []


class TestOtherLanguages:
    """Test JVM, Rust, path-like and unresolved languages."""

    def test_java_type_and_wildcard(self, make_tree, scan) -> None:
        root = make_tree(
            {
                "src/main/java/com/acme/model/User.java": "",
                "src/main/java/com/acme/model/Role.java": "",
                "src/main/java/com/acme/service/UserService.java": "",
            }
        )
        structure = scan(root)
        importer = "src/main/java/com/acme/service/UserService.java"

        assert resolve(structure, importer, "com.acme.model.User") == ["src/main/java/com/acme/model/User"]
        assert resolve(structure, importer, "com.acme.model.*") == [
            "src/main/java/com/acme/model/Role",
            "src/main/java/com/acme/model/User",
        ]

    def test_rust_mod_and_crate_paths(self, make_tree, scan) -> None:
        root = make_tree({"src/main.rs": "", "src/config.rs": "", "src/db/pool.rs": ""})
        structure = scan(root)

        assert resolve(structure, "src/main.rs", "config") == ["src/config"]
        assert resolve(structure, "src/main.rs", "crate::db::pool::Pool") == ["src/db/pool"]

    def test_ruby_and_c_paths(self, make_tree, scan) -> None:
        root = make_tree({"app.rb": "", "lib/helpers.rb": "", "src/main.c": "", "src/util.h": ""})
        structure = scan(root)

        assert resolve(structure, "app.rb", "lib/helpers") == ["lib/helpers"]
        assert resolve(structure, "src/main.c", "util.h") == ["src/util"]

    def test_go_packages_are_not_resolved(self, make_tree, scan) -> None:
        root = make_tree({"main.go": "", "internal/db/db.go": ""})
        structure = scan(root)
        assert resolve(structure, "main.go", "example.com/app/internal/db") == []
