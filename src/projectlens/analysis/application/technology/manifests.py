"""
Dependency manifest parsers.

Each parser takes the manifest text and returns the declared dependency
names. Malformed content raises ManifestParseError; the profiler turns it
into a diagnostic and keeps going with the other manifests.
"""

from __future__ import annotations

import json
import re
import tomllib
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import yaml

from projectlens.shared.domain.exceptions import ProjectLensError


class ManifestParseError(ProjectLensError):
    """Raised when a manifest file cannot be parsed."""

    pass


@dataclass(frozen=True)
class ManifestParser:
    """A parser bound to the package ecosystem it reports dependencies for."""

    ecosystem: str
    parse: Callable[[str], List[str]]


_PEP508_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


def _pep508_name(requirement: str) -> Optional[str]:
    """
    Project name of a PEP 508 requirement string.

    Examples:
        >>> _pep508_name("Django>=4.2; python_version >= '3.10'")
        'Django'
    """
    match = _PEP508_NAME.match(requirement)
    return match.group(1) if match else None


def _load_json_object(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON: {e.msg} (line {e.lineno})") from e
    if not isinstance(data, dict):
        raise ManifestParseError("Expected a JSON object at the top level")
    return data


def _load_toml(text: str) -> Dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(f"Invalid TOML: {e}") from e


def _keys(section: Any) -> List[str]:
    return list(section.keys()) if isinstance(section, dict) else []


def parse_package_json(text: str) -> List[str]:
    data = _load_json_object(text)
    names: List[str] = []
    for section in ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies"):
        names.extend(_keys(data.get(section)))
    return names


def parse_requirements_txt(text: str) -> List[str]:
    """Requirement lines; options (-r, -e, --index-url) and URLs are skipped."""
    names: List[str] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or line.startswith("-") or "://" in line:
            continue
        name = _pep508_name(line)
        if name:
            names.append(name)
    return names


def parse_pyproject_toml(text: str) -> List[str]:
    """PEP 621 [project] tables, Poetry tables and build-system requires."""
    data = _load_toml(text)
    names: List[str] = []

    project = data.get("project", {})
    if isinstance(project, dict):
        requirements = list(project.get("dependencies", []) or [])
        for extra in (project.get("optional-dependencies") or {}).values():
            requirements.extend(extra or [])
        names.extend(n for n in (_pep508_name(r) for r in requirements if isinstance(r, str)) if n)

    poetry = data.get("tool", {}).get("poetry", {})
    if isinstance(poetry, dict):
        names.extend(_keys(poetry.get("dependencies")))
        names.extend(_keys(poetry.get("dev-dependencies")))
        for group in (poetry.get("group") or {}).values():
            if isinstance(group, dict):
                names.extend(_keys(group.get("dependencies")))

    build_requires = data.get("build-system", {}).get("requires", []) or []
    names.extend(n for n in (_pep508_name(r) for r in build_requires if isinstance(r, str)) if n)

    return [n for n in names if n.lower() != "python"]


def parse_pipfile(text: str) -> List[str]:
    data = _load_toml(text)
    return _keys(data.get("packages")) + _keys(data.get("dev-packages"))


_GO_REQUIRE_LINE = re.compile(r"^\s*require\s+([^\s(]+)\s+\S+")
_GO_BLOCK_LINE = re.compile(r"^\s*([^\s/][^\s]*)\s+v\S+")


def parse_go_mod(text: str) -> List[str]:
    """Module paths from single-line and block require directives."""
    names: List[str] = []
    in_block = False
    for raw in text.splitlines():
        line = raw.split("//", 1)[0].rstrip()
        if in_block:
            if line.strip() == ")":
                in_block = False
                continue
            match = _GO_BLOCK_LINE.match(line)
            if match:
                names.append(match.group(1))
            continue
        if re.match(r"^\s*require\s*\($", line):
            in_block = True
            continue
        match = _GO_REQUIRE_LINE.match(line)
        if match:
            names.append(match.group(1))
    if in_block:
        raise ManifestParseError("Unterminated require block")
    return names


def parse_cargo_toml(text: str) -> List[str]:
    data = _load_toml(text)
    names: List[str] = []
    for section in ("dependencies", "dev-dependencies", "build-dependencies"):
        names.extend(_keys(data.get(section)))
    names.extend(_keys(data.get("workspace", {}).get("dependencies")))
    return names


def parse_composer_json(text: str) -> List[str]:
    data = _load_json_object(text)
    names = _keys(data.get("require")) + _keys(data.get("require-dev"))
    return [n for n in names if n != "php" and not n.startswith("ext-")]


_GEM_LINE = re.compile(r"""^\s*gem\s+['"]([^'"]+)['"]""")


def parse_gemfile(text: str) -> List[str]:
    return [m.group(1) for m in (_GEM_LINE.match(line) for line in text.splitlines()) if m]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_pom_xml(text: str) -> List[str]:
    """groupId:artifactId of dependencies and of the parent POM."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ManifestParseError(f"Invalid XML: {e}") from e

    names: List[str] = []
    for element in root.iter():
        if _local_name(element.tag) not in ("dependency", "parent"):
            continue
        fields = {_local_name(child.tag): (child.text or "").strip() for child in element}
        group, artifact = fields.get("groupId"), fields.get("artifactId")
        if group and artifact:
            names.append(f"{group}:{artifact}")
    return names


_GRADLE_DEPENDENCY = re.compile(
    r"""\b(?:implementation|api|compile|compileOnly|runtimeOnly|testImplementation|testRuntimeOnly|"""
    r"""androidTestImplementation|kapt|ksp|annotationProcessor)\s*\(?\s*['"]([^:'"\s]+):([^:'"\s]+)"""
)
_GRADLE_PLUGIN = re.compile(r"""\bid\s*\(?\s*['"]([\w.-]+)['"]""")


def parse_build_gradle(text: str) -> List[str]:
    """Dependency coordinates plus plugin ids (Groovy and Kotlin DSL)."""
    names = [f"{m.group(1)}:{m.group(2)}" for m in _GRADLE_DEPENDENCY.finditer(text)]
    names.extend(m.group(1) for m in _GRADLE_PLUGIN.finditer(text))
    return names


def parse_pubspec_yaml(text: str) -> List[str]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ManifestParseError(f"Invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ManifestParseError("Expected a mapping at the top level")
    return _keys(data.get("dependencies")) + _keys(data.get("dev_dependencies"))


MANIFEST_PARSERS: Dict[str, ManifestParser] = {
    "package.json": ManifestParser("npm", parse_package_json),
    "pyproject.toml": ManifestParser("pypi", parse_pyproject_toml),
    "pipfile": ManifestParser("pypi", parse_pipfile),
    "go.mod": ManifestParser("go", parse_go_mod),
    "cargo.toml": ManifestParser("cargo", parse_cargo_toml),
    "composer.json": ManifestParser("composer", parse_composer_json),
    "gemfile": ManifestParser("rubygems", parse_gemfile),
    "pom.xml": ManifestParser("maven", parse_pom_xml),
    "build.gradle": ManifestParser("maven", parse_build_gradle),
    "build.gradle.kts": ManifestParser("maven", parse_build_gradle),
    "pubspec.yaml": ManifestParser("pub", parse_pubspec_yaml),
}

_REQUIREMENTS_NAME = re.compile(r"^requirements[\w.-]*\.txt$")
_REQUIREMENTS_PARSER = ManifestParser("pypi", parse_requirements_txt)


def get_manifest_parser(file_name: str) -> Optional[ManifestParser]:
    """
    Parser for a manifest file name, or None for non-manifests.

    Examples:
        >>> get_manifest_parser("requirements-dev.txt").ecosystem
        'pypi'
        >>> get_manifest_parser("README.md") is None
        True
    """
    name = file_name.lower()
    if name in MANIFEST_PARSERS:
        return MANIFEST_PARSERS[name]
    if _REQUIREMENTS_NAME.match(name):
        return _REQUIREMENTS_PARSER
    return None
