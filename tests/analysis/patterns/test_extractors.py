"""
Unit tests for the lexical per-language extractors.
"""

from projectlens.analysis.application.patterns.extractors import (
    EXTRACTORS,
    ImportReference,
    extract,
    get_extractor,
)
from projectlens.analysis.domain.dependency_graph import EdgeKind
from projectlens.shared.languages.definitions import CodeLanguage


def _specifiers(result) -> list[str]:
    return [ref.specifier for ref in result.imports]


PYTHON_SOURCE = '''
import os, sys
import app.services.user as user_service
from . import models
from ..core.config import Settings, load_settings as load
from typing import (
    List,
    Optional,
)
MAX_RETRIES = 3

@dataclass
class UserRecord:
    name: str

async def fetch_user(user_id: int) -> UserRecord:
    module = importlib.import_module("app.plugins.loader")
    return [u for u in users if u]
'''


class TestPythonExtractor:
    """Test Python extraction."""

    def test_identifiers(self) -> None:
        """Classes, functions and assigned names are collected."""
        result = extract(CodeLanguage.PYTHON, PYTHON_SOURCE)
        assert result.classes == ["UserRecord"]
        assert result.functions == ["fetch_user"]
        assert result.variables == ["MAX_RETRIES", "module"]

    def test_imports(self) -> None:
        """Plain, aliased, relative, parenthesized and dynamic imports."""
        result = extract(CodeLanguage.PYTHON, PYTHON_SOURCE)
        assert ImportReference("os") in result.imports
        assert ImportReference("sys") in result.imports
        assert ImportReference("app.services.user") in result.imports
        assert ImportReference(".", names=("models",)) in result.imports
        assert ImportReference("..core.config", names=("Settings", "load_settings")) in result.imports
        assert ImportReference("typing", names=("List", "Optional")) in result.imports
        assert ImportReference("app.plugins.loader", EdgeKind.DYNAMIC_IMPORT) in result.imports

    def test_idioms(self) -> None:
        """Idioms are detected from source shapes."""
        idioms = extract(CodeLanguage.PYTHON, PYTHON_SOURCE).idioms
        assert {"Dataclasses", "Type Hints", "Async/Await", "List Comprehensions"} <= idioms
        assert "Decorators" not in idioms  # @dataclass alone is reported as Dataclasses


JS_SOURCE = """
import React, { useState } from 'react';
import './styles.css';
export { helper } from './helpers';
const lazy = () => import('./pages/Lazy');
const config = require('../config');
function renderApp() {}
class AppShell {}
const MAX_ITEMS = 10;
"""


class TestJavaScriptExtractor:
    """Test JavaScript and TypeScript extraction."""

    def test_import_forms(self) -> None:
        """Static, side-effect, re-export, dynamic and require imports."""
        result = extract(CodeLanguage.JAVASCRIPT, JS_SOURCE)
        assert _specifiers(result) == ["react", "./styles.css", "./helpers", "./pages/Lazy", "../config"]
        kinds = {ref.specifier: ref.kind for ref in result.imports}
        assert kinds["./pages/Lazy"] == EdgeKind.DYNAMIC_IMPORT
        assert kinds["../config"] == EdgeKind.REQUIRE
        assert kinds["react"] == EdgeKind.STATIC_IMPORT

    def test_identifiers(self) -> None:
        """Arrow functions count as functions, not variables."""
        result = extract(CodeLanguage.JAVASCRIPT, JS_SOURCE)
        assert result.functions == ["renderApp", "lazy"]
        assert result.variables == ["config", "MAX_ITEMS"]
        assert result.classes == ["AppShell"]
        assert {"ES Modules", "CommonJS", "Arrow Functions"} <= result.idioms

    def test_typescript_types_count_as_classes(self) -> None:
        """Interfaces, type aliases and enums are class-like names."""
        source = (
            "export interface User { id: string }\n"
            "export type UserMap = Record<string, User>;\n"
            "enum Role { Admin, Guest }\n"
            "function isUser(value: unknown): value is User { return true; }\n"
        )
        result = extract(CodeLanguage.TYPESCRIPT, source)
        assert result.classes == ["User", "UserMap", "Role"]
        assert {"Interfaces", "Utility Types", "Type Guards"} <= result.idioms

    def test_react_idioms(self) -> None:
        """Hooks and JSX are recognized in TSX files."""
        source = (
            "export const Counter: React.FC = () => {\n"
            "  const [count, setCount] = useState(0);\n"
            "  return (<Button onClick={() => setCount(count + 1)} />);\n"
            "};\n"
        )
        idioms = extract(CodeLanguage.TYPESCRIPT, source).idioms
        assert {"React Hooks", "JSX", "React with TypeScript", "React Components"} <= idioms

    def test_component_definitions(self) -> None:
        """Capitalized functions or arrow consts returning JSX are components."""
        function_component = "export default function App() {\n  return <Layout title='Shop' />;\n}\n"
        arrow_component = (
            "export const ProductCard = ({ price }: { price: number }) => {\n"
            "  return (<div>{price}</div>);\n"
            "};\n"
        )

        assert "React Components" in extract(CodeLanguage.JAVASCRIPT, function_component).idioms
        assert "React Components" in extract(CodeLanguage.TYPESCRIPT, arrow_component).idioms

    def test_component_needs_capitalized_name_and_jsx(self) -> None:
        lowercase_helper = "const renderRow = (row) => <tr>{row.id}</tr>;\n"
        constant_only = "export const MAX_ITEMS = 10;\nexport function Format(value) { return String(value); }\n"

        assert "React Components" not in extract(CodeLanguage.JAVASCRIPT, lowercase_helper).idioms
        assert "React Components" not in extract(CodeLanguage.JAVASCRIPT, constant_only).idioms
        assert "React Components" not in extract(CodeLanguage.JAVASCRIPT, JS_SOURCE).idioms

    def test_single_file_component(self) -> None:
        """Only the <script> block of a Vue file is parsed."""
        source = (
            "<template><Card /></template>\n"
            '<script setup lang="ts">\n'
            "import Card from './Card.vue';\n"
            "const count = ref(0);\n"
            "</script>\n"
        )
        result = extract(CodeLanguage.VUE, source)
        assert _specifiers(result) == ["./Card.vue"]
        assert result.variables == ["count"]
        assert "Single-File Components" in result.idioms


class TestOtherExtractors:
    """Test the remaining language extractors."""

    def test_go(self) -> None:
        """Go import blocks, receiver methods and idioms."""
        source = (
            "package main\n\n"
            "import (\n"
            '    "fmt"\n'
            '    "github.com/acme/app/internal/store"\n'
            ")\n\n"
            "type Server struct {}\n\n"
            "func (s *Server) HandleRequest(ctx context.Context) error {\n"
            "    result, err := s.store.Load(ctx)\n"
            "    if err != nil { return err }\n"
            "    go s.refresh()\n"
            "    return nil\n"
            "}\n"
        )
        result = extract(CodeLanguage.GO, source)
        assert result.functions == ["HandleRequest"]
        assert result.classes == ["Server"]
        assert _specifiers(result) == ["fmt", "github.com/acme/app/internal/store"]
        assert {"Goroutines", "Error Wrapping", "Context Propagation"} <= result.idioms

    def test_java(self) -> None:
        """Java imports (static and wildcard), classes, methods and fields."""
        source = (
            "package com.acme.service;\n\n"
            "import com.acme.model.User;\n"
            "import static com.acme.util.Strings.isBlank;\n"
            "import java.util.*;\n\n"
            "@Service\n"
            "public class UserService {\n"
            "    private final UserRepository repository;\n"
            "    public List<User> findActive() {\n"
            "        return repository.findAll().stream().filter(u -> u.isActive()).toList();\n"
            "    }\n"
            "}\n"
        )
        result = extract(CodeLanguage.JAVA, source)
        assert _specifiers(result) == ["com.acme.model.User", "com.acme.util.Strings.isBlank", "java.util.*"]
        assert result.classes == ["UserService"]
        assert result.functions == ["findActive"]
        assert result.variables == ["repository"]
        assert {"Spring Annotations", "Streams", "Lambdas"} <= result.idioms

    def test_ruby_require_relative_is_file_relative(self) -> None:
        """require_relative targets are prefixed so they resolve against the file."""
        source = "require 'json'\nrequire_relative 'lib/helpers'\n\nclass Order < ApplicationRecord\n  def total?\n  end\nend\n"
        result = extract(CodeLanguage.RUBY, source)
        assert _specifiers(result) == ["json", "./lib/helpers"]
        assert all(ref.kind == EdgeKind.REQUIRE for ref in result.imports)
        assert result.functions == ["total"]
        assert "ActiveRecord" in result.idioms

    def test_rust_only_keeps_crate_local_paths(self) -> None:
        """'mod' declarations and crate/self/super uses are kept; std is not."""
        source = "mod config;\nuse crate::db::pool::Pool;\nuse std::io;\n\npub fn main() {}\n"
        result = extract(CodeLanguage.RUST, source)
        assert _specifiers(result) == ["config", "crate::db::pool::Pool"]
        assert result.functions == ["main"]

    def test_c_only_keeps_local_includes(self) -> None:
        """System includes are not project modules."""
        source = '#include <stdio.h>\n#include "util.h"\n#define BUFFER_SIZE 64\n\nint main(void) {\n  return 0;\n}\n'
        result = extract(CodeLanguage.C, source)
        assert _specifiers(result) == ["util.h"]
        assert result.variables == ["BUFFER_SIZE"]
        assert result.functions == ["main"]

    def test_php_includes(self) -> None:
        """require/include forms, including __DIR__ concatenation."""
        source = "<?php\nrequire_once __DIR__ . '/lib/db.php';\ninclude 'views/header.php';\n$userName = 'x';\n"
        result = extract(CodeLanguage.PHP, source)
        assert _specifiers(result) == ["/lib/db.php", "views/header.php"]
        assert result.variables == ["userName"]


class TestDispatch:
    """Test the language strategy map."""

    def test_every_extractor_is_registered_by_language(self) -> None:
        """The strategy map is keyed by the closed language enum."""
        assert all(isinstance(language, CodeLanguage) for language in EXTRACTORS)
        assert get_extractor(CodeLanguage.PYTHON) is not None

    def test_unsupported_language_yields_empty_result(self) -> None:
        """Languages without an extractor produce nothing."""
        assert get_extractor(CodeLanguage.SHELL) is None
        result = extract(CodeLanguage.SHELL, "echo hi")
        assert result.imports == [] and result.functions == [] and result.idioms == set()
