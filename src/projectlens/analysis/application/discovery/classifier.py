"""
File category classifier.

File-name rules (exact manifest/lock-file names, test and config name
shapes, build output locations) take priority over the static extension
table.
"""

import re
from posixpath import basename
from typing import Dict, FrozenSet, Set

from projectlens.analysis.domain.structure import FileCategory
from projectlens.shared.languages.definitions import CodeLanguage
from projectlens.shared.languages.registry import LanguageRegistry


class FileClassifier:
    """
    Classifies files into the closed FileCategory set.

    All lookups are done on lowercase names.
    """

    # Exact file names (lowercase)
    FILENAME_MAP: Dict[str, FileCategory] = {
        # JavaScript / TypeScript
        "package.json": FileCategory.CONFIG,
        "package-lock.json": FileCategory.CONFIG,
        "npm-shrinkwrap.json": FileCategory.CONFIG,
        "yarn.lock": FileCategory.CONFIG,
        "pnpm-lock.yaml": FileCategory.CONFIG,
        "pnpm-workspace.yaml": FileCategory.CONFIG,
        "bun.lockb": FileCategory.CONFIG,
        "tsconfig.json": FileCategory.CONFIG,
        "jsconfig.json": FileCategory.CONFIG,
        ".npmrc": FileCategory.CONFIG,
        ".nvmrc": FileCategory.CONFIG,
        # Python
        "pyproject.toml": FileCategory.CONFIG,
        "setup.py": FileCategory.CONFIG,
        "setup.cfg": FileCategory.CONFIG,
        "pipfile": FileCategory.CONFIG,
        "pipfile.lock": FileCategory.CONFIG,
        "poetry.lock": FileCategory.CONFIG,
        "tox.ini": FileCategory.CONFIG,
        "manage.py": FileCategory.SOURCE,
        # Other ecosystems
        "go.mod": FileCategory.CONFIG,
        "go.sum": FileCategory.CONFIG,
        "cargo.toml": FileCategory.CONFIG,
        "cargo.lock": FileCategory.CONFIG,
        "composer.json": FileCategory.CONFIG,
        "composer.lock": FileCategory.CONFIG,
        "gemfile": FileCategory.CONFIG,
        "gemfile.lock": FileCategory.CONFIG,
        "rakefile": FileCategory.CONFIG,
        "pom.xml": FileCategory.CONFIG,
        "build.gradle": FileCategory.CONFIG,
        "build.gradle.kts": FileCategory.CONFIG,
        "settings.gradle": FileCategory.CONFIG,
        "settings.gradle.kts": FileCategory.CONFIG,
        "pubspec.yaml": FileCategory.CONFIG,
        "pubspec.lock": FileCategory.CONFIG,
        "cmakelists.txt": FileCategory.CONFIG,
        # Tooling
        "makefile": FileCategory.CONFIG,
        "dockerfile": FileCategory.CONFIG,
        "procfile": FileCategory.CONFIG,
        "jenkinsfile": FileCategory.CONFIG,
        "vagrantfile": FileCategory.CONFIG,
        ".gitignore": FileCategory.CONFIG,
        ".gitattributes": FileCategory.CONFIG,
        ".dockerignore": FileCategory.CONFIG,
        ".editorconfig": FileCategory.CONFIG,
        ".env": FileCategory.CONFIG,
        # Documentation without extension
        "readme": FileCategory.DOCUMENTATION,
        "license": FileCategory.DOCUMENTATION,
        "licence": FileCategory.DOCUMENTATION,
        "changelog": FileCategory.DOCUMENTATION,
        "contributing": FileCategory.DOCUMENTATION,
        "authors": FileCategory.DOCUMENTATION,
        "notice": FileCategory.DOCUMENTATION,
        "copying": FileCategory.DOCUMENTATION,
    }

    # Name shapes matched before the extension table
    CONFIG_NAME_PATTERNS = (
        re.compile(r"^requirements[\w.-]*\.(txt|in)$"),
        re.compile(r"^dockerfile\..+$"),
        re.compile(r"^\.env\..+$"),
        re.compile(r"^[\w.-]+\.config\.(js|cjs|mjs|ts|cts|mts|json)$"),  # vite.config.ts, jest.config.js
        re.compile(r"^\.[\w-]+rc(\.(js|cjs|json|ya?ml))?$"),  # .eslintrc.js, .prettierrc
        re.compile(r"^docker-compose[\w.-]*\.ya?ml$"),
    )

    TEST_NAME_PATTERNS = (
        re.compile(r"^test_.+\.py$"),
        re.compile(r"^.+_test\.(py|go|rb|exs?|dart)$"),
        re.compile(r"^.+_spec\.rb$"),
        re.compile(r"^.+\.(test|spec)\.[a-z]+$"),
        re.compile(r"^conftest\.py$"),
        re.compile(r"^.+tests?\.(java|kt|cs|scala|swift|php)$"),
    )

    TEST_DIRECTORIES: FrozenSet[str] = frozenset({"test", "tests", "__tests__", "spec", "specs", "__mocks__"})

    BUILD_OUTPUT_DIRECTORIES: FrozenSet[str] = frozenset(
        {"dist", "build", "out", "target", ".next", ".nuxt", "__pycache__", "coverage"}
    )

    BUILD_ARTIFACT_NAME_PATTERNS = (re.compile(r"^.+\.min\.(js|css)$"),)

    EXTENSION_MAP: Dict[str, FileCategory] = {
        # Configuration / data
        ".json": FileCategory.CONFIG,
        ".jsonc": FileCategory.CONFIG,
        ".yaml": FileCategory.CONFIG,
        ".yml": FileCategory.CONFIG,
        ".toml": FileCategory.CONFIG,
        ".ini": FileCategory.CONFIG,
        ".cfg": FileCategory.CONFIG,
        ".conf": FileCategory.CONFIG,
        ".xml": FileCategory.CONFIG,
        ".properties": FileCategory.CONFIG,
        ".gradle": FileCategory.CONFIG,
        ".lock": FileCategory.CONFIG,
        ".env": FileCategory.CONFIG,
        ".plist": FileCategory.CONFIG,
        # Documentation
        ".md": FileCategory.DOCUMENTATION,
        ".mdx": FileCategory.DOCUMENTATION,
        ".markdown": FileCategory.DOCUMENTATION,
        ".rst": FileCategory.DOCUMENTATION,
        ".txt": FileCategory.DOCUMENTATION,
        ".adoc": FileCategory.DOCUMENTATION,
        ".pdf": FileCategory.DOCUMENTATION,
        # Stylesheets
        ".css": FileCategory.STYLESHEET,
        ".scss": FileCategory.STYLESHEET,
        ".sass": FileCategory.STYLESHEET,
        ".less": FileCategory.STYLESHEET,
        ".styl": FileCategory.STYLESHEET,
        ".pcss": FileCategory.STYLESHEET,
        # Assets
        ".png": FileCategory.ASSET,
        ".jpg": FileCategory.ASSET,
        ".jpeg": FileCategory.ASSET,
        ".gif": FileCategory.ASSET,
        ".svg": FileCategory.ASSET,
        ".ico": FileCategory.ASSET,
        ".webp": FileCategory.ASSET,
        ".bmp": FileCategory.ASSET,
        ".avif": FileCategory.ASSET,
        ".ttf": FileCategory.ASSET,
        ".otf": FileCategory.ASSET,
        ".woff": FileCategory.ASSET,
        ".woff2": FileCategory.ASSET,
        ".eot": FileCategory.ASSET,
        ".mp3": FileCategory.ASSET,
        ".wav": FileCategory.ASSET,
        ".ogg": FileCategory.ASSET,
        ".mp4": FileCategory.ASSET,
        ".webm": FileCategory.ASSET,
        ".mov": FileCategory.ASSET,
        # Build artifacts
        ".map": FileCategory.BUILD_ARTIFACT,
        ".pyc": FileCategory.BUILD_ARTIFACT,
        ".pyo": FileCategory.BUILD_ARTIFACT,
        ".class": FileCategory.BUILD_ARTIFACT,
        ".o": FileCategory.BUILD_ARTIFACT,
        ".obj": FileCategory.BUILD_ARTIFACT,
        ".a": FileCategory.BUILD_ARTIFACT,
        ".so": FileCategory.BUILD_ARTIFACT,
        ".dll": FileCategory.BUILD_ARTIFACT,
        ".dylib": FileCategory.BUILD_ARTIFACT,
        ".exe": FileCategory.BUILD_ARTIFACT,
        ".jar": FileCategory.BUILD_ARTIFACT,
        ".war": FileCategory.BUILD_ARTIFACT,
        ".whl": FileCategory.BUILD_ARTIFACT,
        ".egg": FileCategory.BUILD_ARTIFACT,
        ".wasm": FileCategory.BUILD_ARTIFACT,
    }

    @classmethod
    def classify(cls, relative_path: str) -> FileCategory:
        """
        Classify a file by its name, location and extension.

        Args:
            relative_path: POSIX path relative to the project root

        Returns:
            FileCategory enum value

        Examples:
            >>> FileClassifier.classify("package.json")
            <FileCategory.CONFIG: 'config'>
            >>> FileClassifier.classify("src/app.test.ts")
            <FileCategory.TEST: 'test'>
            >>> FileClassifier.classify("src/app.ts")
            <FileCategory.SOURCE: 'source'>
        """
        name = basename(relative_path).lower()
        directories = [part.lower() for part in relative_path.split("/")[:-1]]
        extension = cls.get_extension(name)
        is_code = extension in LanguageRegistry.get_all_supported_extensions()

        # 1. Exact file names
        if name in cls.FILENAME_MAP:
            return cls.FILENAME_MAP[name]

        # 2. Build output
        if any(d in cls.BUILD_OUTPUT_DIRECTORIES for d in directories):
            return FileCategory.BUILD_ARTIFACT
        if any(p.match(name) for p in cls.BUILD_ARTIFACT_NAME_PATTERNS):
            return FileCategory.BUILD_ARTIFACT

        # 3. Config name shapes
        if any(p.match(name) for p in cls.CONFIG_NAME_PATTERNS):
            return FileCategory.CONFIG

        # 4. Tests: name shapes, or code living in a test directory
        if is_code and any(p.match(name) for p in cls.TEST_NAME_PATTERNS):
            return FileCategory.TEST
        if is_code and any(d in cls.TEST_DIRECTORIES for d in directories):
            return FileCategory.TEST

        # 5. Extension table
        if is_code:
            return FileCategory.SOURCE
        return cls.EXTENSION_MAP.get(extension, FileCategory.OTHER)

    @staticmethod
    def get_extension(name: str) -> str:
        """
        Lowercase extension with leading dot ("" when absent).

        Dot-files without a further dot (".gitignore") have no extension.
        """
        bare = name.lstrip(".")
        if "." not in bare:
            return ""
        return "." + bare.rsplit(".", 1)[-1].lower()

    @staticmethod
    def get_language(name: str) -> CodeLanguage:
        return LanguageRegistry.get_language_from_extension(FileClassifier.get_extension(name))

    @classmethod
    def get_supported_extensions(cls) -> Set[str]:
        """All extensions with an explicit category."""
        return set(cls.EXTENSION_MAP) | LanguageRegistry.get_all_supported_extensions()
