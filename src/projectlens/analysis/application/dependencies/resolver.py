"""
Import specifier resolution.

Maps a raw specifier found in one source file to the node ids of in-project
source files. Anything that does not resolve to a known source file (third
party packages, standard libraries, generated code) is dropped.

Go package imports and C# namespaces name packages, not files, and are not
resolved.
"""

from __future__ import annotations

import posixpath
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from projectlens.analysis.application.patterns.extractors import ImportReference
from projectlens.analysis.domain.structure import FileCategory, FileRecord, ProjectStructure
from projectlens.shared.languages.definitions import CodeLanguage

JS_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts", ".vue", ".svelte")
SOURCE_ROOTS = ("", "src/")
_JS_LANGUAGES = {CodeLanguage.JAVASCRIPT, CodeLanguage.TYPESCRIPT, CodeLanguage.VUE, CodeLanguage.SVELTE}
_JVM_LANGUAGES = {CodeLanguage.JAVA, CodeLanguage.KOTLIN}
_RUST_MODULE_ROOTS = ("main.rs", "lib.rs", "mod.rs")


def node_id(relative_path: str) -> str:
    """
    Canonical node id: relative path with the extension stripped.

    Examples:
        >>> node_id("src/utils/format.ts")
        'src/utils/format'
    """
    head, name = posixpath.split(relative_path)
    bare = name.lstrip(".")
    if "." not in bare:
        return relative_path
    stem = name[: len(name) - len(bare)] + bare.rsplit(".", 1)[0]
    return posixpath.join(head, stem) if head else stem


def _normalize(path: str) -> Optional[str]:
    """Collapse '.'/'..' segments; None when the path escapes the root."""
    normalized = posixpath.normpath(path)
    if normalized.startswith("..") or normalized.startswith("/"):
        return None
    return "" if normalized == "." else normalized


class ModuleResolver:
    """Resolves import references against the source files of one project."""

    def __init__(self, structure: ProjectStructure):
        self.source_paths: set[str] = {
            f.relative_path for f in structure.files if f.category == FileCategory.SOURCE
        }
        # Dotted-path suffix -> node ids, for package-qualified JVM imports
        self._jvm_paths = sorted(p for p in self.source_paths if p.endswith((".java", ".kt")))
        self._jvm_suffixes: Dict[str, List[str]] = defaultdict(list)
        for path in self._jvm_paths:
            parts = node_id(path).split("/")
            for start in range(len(parts)):
                self._jvm_suffixes[".".join(parts[start:])].append(node_id(path))

        self._strategies: Dict[CodeLanguage, Callable[[FileRecord, ImportReference], List[str]]] = {
            CodeLanguage.PYTHON: self._resolve_python,
            CodeLanguage.RUBY: lambda importer, ref: self._resolve_path_like(importer, ref, ("", ".rb"), ("lib/",)),
            CodeLanguage.PHP: lambda importer, ref: self._resolve_path_like(importer, ref, ("", ".php"), ()),
            CodeLanguage.C: lambda importer, ref: self._resolve_path_like(importer, ref, ("",), ("include/",)),
            CodeLanguage.CPP: lambda importer, ref: self._resolve_path_like(importer, ref, ("",), ("include/",)),
            CodeLanguage.RUST: self._resolve_rust,
        }
        for language in _JS_LANGUAGES:
            self._strategies[language] = self._resolve_javascript
        for language in _JVM_LANGUAGES:
            self._strategies[language] = self._resolve_jvm

    def resolve(self, importer: FileRecord, reference: ImportReference) -> List[str]:
        """
        Node ids an import reference points at (empty when unresolved).

        Self-references are never returned.
        """
        strategy = self._strategies.get(importer.language)
        if strategy is None:
            return []
        own_id = node_id(importer.relative_path)
        targets = []
        for target in strategy(importer, reference):
            if target != own_id and target not in targets:
                targets.append(target)
        return targets

    def _first_existing(self, candidates: Iterable[str]) -> Optional[str]:
        for candidate in candidates:
            if candidate in self.source_paths:
                return candidate
        return None

    # JavaScript / TypeScript

    def _js_candidates(self, base: str) -> List[str]:
        candidates = [base]
        candidates.extend(base + ext for ext in JS_EXTENSIONS)
        candidates.extend(posixpath.join(base, "index" + ext) for ext in JS_EXTENSIONS)
        return candidates

    def _resolve_javascript(self, importer: FileRecord, reference: ImportReference) -> List[str]:
        specifier = reference.specifier.split("?", 1)[0]
        if specifier.startswith(("./", "../")) or specifier in (".", ".."):
            bases = [posixpath.join(importer.parent, specifier)]
        elif specifier.startswith(("@/", "~/")):
            bases = [root + specifier[2:] for root in SOURCE_ROOTS]
        elif specifier.startswith("/"):
            bases = [root + specifier[1:] for root in SOURCE_ROOTS]
        else:
            return []

        for base in bases:
            normalized = _normalize(base)
            if normalized is None:
                continue
            found = self._first_existing(self._js_candidates(normalized))
            if found:
                return [node_id(found)]
        return []

    # Python

    def _python_module(self, base: str) -> Optional[str]:
        if not base:
            return self._first_existing(["__init__.py"])
        return self._first_existing([base + ".py", posixpath.join(base, "__init__.py")])

    def _python_targets(self, base: str, names: tuple[str, ...]) -> List[str]:
        """Submodules named in `from base import a, b`, else base itself."""
        submodules = [self._python_module(posixpath.join(base, name) if base else name) for name in names]
        found = [node_id(path) for path in submodules if path]
        if found:
            return found
        module = self._python_module(base)
        return [node_id(module)] if module else []

    def _resolve_python(self, importer: FileRecord, reference: ImportReference) -> List[str]:
        specifier = reference.specifier
        if specifier.startswith("."):
            level = len(specifier) - len(specifier.lstrip("."))
            package = importer.parent
            for _ in range(level - 1):
                if not package:
                    return []
                package = posixpath.dirname(package)
            module = specifier[level:].replace(".", "/")
            base = posixpath.join(package, module) if package and module else (package or module)
            return self._python_targets(base, reference.names)

        module = specifier.replace(".", "/")
        for root in SOURCE_ROOTS:
            targets = self._python_targets(root + module, reference.names)
            if targets:
                return targets
        return []

    # Ruby / PHP / C / C++

    def _resolve_path_like(
        self,
        importer: FileRecord,
        reference: ImportReference,
        extensions: tuple[str, ...],
        extra_roots: tuple[str, ...],
    ) -> List[str]:
        """File-relative first, then root-relative (plus language include roots)."""
        specifier = reference.specifier.lstrip("/")
        bases = [posixpath.join(importer.parent, specifier)]
        if not specifier.startswith("."):
            bases.append(specifier)
            bases.extend(root + specifier for root in extra_roots)

        for base in bases:
            normalized = _normalize(base)
            if not normalized:
                continue
            found = self._first_existing(normalized + ext for ext in extensions)
            if found:
                return [node_id(found)]
        return []

    # Java / Kotlin

    def _resolve_jvm(self, importer: FileRecord, reference: ImportReference) -> List[str]:
        specifier = reference.specifier
        if specifier.endswith(".*"):
            package = specifier[:-2].replace(".", "/")
            return sorted(
                node_id(path)
                for path in self._jvm_paths
                if posixpath.dirname(path) == package or posixpath.dirname(path).endswith("/" + package)
            )

        # Static imports name a member; drop trailing segments until a type matches
        segments = specifier.split(".")
        while segments:
            matches = self._jvm_suffixes.get(".".join(segments))
            if matches:
                return sorted(set(matches))
            segments = segments[:-1]
            if len(segments) < 2:
                break
        return []

    # Rust

    def _rust_module_dir(self, importer: FileRecord) -> str:
        if importer.name in _RUST_MODULE_ROOTS:
            return importer.parent
        return node_id(importer.relative_path)

    def _rust_crate_root(self, importer: FileRecord) -> str:
        directory = importer.parent
        while True:
            if any(posixpath.join(directory, root) in self.source_paths for root in ("lib.rs", "main.rs")):
                return directory
            if not directory:
                return "src"
            directory = posixpath.dirname(directory)

    def _resolve_rust(self, importer: FileRecord, reference: ImportReference) -> List[str]:
        specifier = reference.specifier.rstrip(":")
        if "::" not in specifier:
            # `mod name;` declares a child module
            base = posixpath.join(self._rust_module_dir(importer), specifier)
            found = self._first_existing([base + ".rs", posixpath.join(base, "mod.rs")])
            return [node_id(found)] if found else []

        head, *segments = specifier.split("::")
        if head == "crate":
            directory = self._rust_crate_root(importer)
        elif head == "self":
            directory = self._rust_module_dir(importer)
        else:  # super
            directory = posixpath.dirname(self._rust_module_dir(importer))

        for length in range(len(segments), 0, -1):
            base = posixpath.join(directory, *segments[:length])
            found = self._first_existing([base + ".rs", posixpath.join(base, "mod.rs")])
            if found:
                return [node_id(found)]
        return []
