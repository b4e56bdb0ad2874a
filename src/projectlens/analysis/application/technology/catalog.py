"""
Technology catalog.

Curated per-ecosystem dependency tables, marker file rules and named stack
combinations. Dependency names are matched exactly first, then by the
longest matching prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from projectlens.analysis.domain.tech_stack import TechnologyCategory

FRAMEWORK = TechnologyCategory.FRAMEWORK
LIBRARY = TechnologyCategory.LIBRARY
BUILD_TOOL = TechnologyCategory.BUILD_TOOL
TESTING = TechnologyCategory.TESTING


@dataclass(frozen=True)
class DependencyRule:
    """Maps a declared dependency (or dependency prefix) to a technology."""

    match: str
    name: str
    category: TechnologyCategory
    prefix: bool = False


def _exact(match: str, name: str, category: TechnologyCategory) -> DependencyRule:
    return DependencyRule(match=match, name=name, category=category)


def _prefix(match: str, name: str, category: TechnologyCategory) -> DependencyRule:
    return DependencyRule(match=match, name=name, category=category, prefix=True)


NPM_RULES: Tuple[DependencyRule, ...] = (
    # Frameworks
    _exact("react", "React", FRAMEWORK),
    _exact("next", "Next.js", FRAMEWORK),
    _exact("vue", "Vue.js", FRAMEWORK),
    _exact("nuxt", "Nuxt.js", FRAMEWORK),
    _exact("@angular/core", "Angular", FRAMEWORK),
    _exact("svelte", "Svelte", FRAMEWORK),
    _exact("@sveltejs/kit", "SvelteKit", FRAMEWORK),
    _exact("solid-js", "SolidJS", FRAMEWORK),
    _exact("preact", "Preact", FRAMEWORK),
    _exact("react-native", "React Native", FRAMEWORK),
    _exact("gatsby", "Gatsby", FRAMEWORK),
    _exact("astro", "Astro", FRAMEWORK),
    _prefix("@remix-run/", "Remix", FRAMEWORK),
    _exact("express", "Express", FRAMEWORK),
    _exact("koa", "Koa", FRAMEWORK),
    _exact("fastify", "Fastify", FRAMEWORK),
    _exact("@hapi/hapi", "Hapi", FRAMEWORK),
    _prefix("@nestjs/", "NestJS", FRAMEWORK),
    _exact("electron", "Electron", FRAMEWORK),
    # Libraries
    _exact("redux", "Redux", LIBRARY),
    _exact("@reduxjs/toolkit", "Redux", LIBRARY),
    _exact("mobx", "MobX", LIBRARY),
    _exact("zustand", "Zustand", LIBRARY),
    _exact("rxjs", "RxJS", LIBRARY),
    _exact("axios", "Axios", LIBRARY),
    _exact("lodash", "Lodash", LIBRARY),
    _exact("jquery", "jQuery", LIBRARY),
    _exact("mongoose", "MongoDB", LIBRARY),
    _exact("mongodb", "MongoDB", LIBRARY),
    _exact("pg", "PostgreSQL", LIBRARY),
    _exact("mysql2", "MySQL", LIBRARY),
    _exact("prisma", "Prisma", LIBRARY),
    _exact("@prisma/client", "Prisma", LIBRARY),
    _exact("drizzle-orm", "Drizzle", LIBRARY),
    _exact("typeorm", "TypeORM", LIBRARY),
    _exact("sequelize", "Sequelize", LIBRARY),
    _exact("graphql", "GraphQL", LIBRARY),
    _prefix("@apollo/", "Apollo", LIBRARY),
    _prefix("@trpc/", "tRPC", LIBRARY),
    _exact("@tanstack/react-query", "React Query", LIBRARY),
    _exact("tailwindcss", "Tailwind CSS", LIBRARY),
    _exact("styled-components", "styled-components", LIBRARY),
    _prefix("@emotion/", "Emotion", LIBRARY),
    _prefix("@mui/", "Material UI", LIBRARY),
    _exact("next-auth", "NextAuth.js", LIBRARY),
    _exact("socket.io", "Socket.IO", LIBRARY),
    _exact("zod", "Zod", LIBRARY),
    _exact("three", "Three.js", LIBRARY),
    _exact("d3", "D3", LIBRARY),
    _prefix("@storybook/", "Storybook", LIBRARY),
    # Build tools
    _exact("typescript", "TypeScript", BUILD_TOOL),
    _exact("vite", "Vite", BUILD_TOOL),
    _exact("webpack", "Webpack", BUILD_TOOL),
    _exact("rollup", "Rollup", BUILD_TOOL),
    _exact("esbuild", "esbuild", BUILD_TOOL),
    _exact("parcel", "Parcel", BUILD_TOOL),
    _exact("@babel/core", "Babel", BUILD_TOOL),
    _exact("eslint", "ESLint", BUILD_TOOL),
    _exact("prettier", "Prettier", BUILD_TOOL),
    _exact("gulp", "Gulp", BUILD_TOOL),
    _exact("grunt", "Grunt", BUILD_TOOL),
    _exact("turbo", "Turborepo", BUILD_TOOL),
    _exact("lerna", "Lerna", BUILD_TOOL),
    _exact("nx", "Nx", BUILD_TOOL),
    _prefix("@nx/", "Nx", BUILD_TOOL),
    # Testing
    _exact("jest", "Jest", TESTING),
    _exact("vitest", "Vitest", TESTING),
    _exact("mocha", "Mocha", TESTING),
    _exact("chai", "Chai", TESTING),
    _exact("jasmine", "Jasmine", TESTING),
    _exact("karma", "Karma", TESTING),
    _exact("ava", "AVA", TESTING),
    _exact("cypress", "Cypress", TESTING),
    _exact("@playwright/test", "Playwright", TESTING),
    _exact("playwright", "Playwright", TESTING),
    _prefix("@testing-library/", "Testing Library", TESTING),
    _exact("supertest", "SuperTest", TESTING),
)

PYPI_RULES: Tuple[DependencyRule, ...] = (
    # Frameworks
    _exact("django", "Django", FRAMEWORK),
    _exact("djangorestframework", "Django REST Framework", FRAMEWORK),
    _exact("flask", "Flask", FRAMEWORK),
    _exact("fastapi", "FastAPI", FRAMEWORK),
    _exact("starlette", "Starlette", FRAMEWORK),
    _exact("tornado", "Tornado", FRAMEWORK),
    _exact("aiohttp", "aiohttp", FRAMEWORK),
    _exact("pyramid", "Pyramid", FRAMEWORK),
    _exact("sanic", "Sanic", FRAMEWORK),
    _exact("streamlit", "Streamlit", FRAMEWORK),
    # Libraries
    _exact("sqlalchemy", "SQLAlchemy", LIBRARY),
    _exact("alembic", "Alembic", LIBRARY),
    _exact("pydantic", "Pydantic", LIBRARY),
    _exact("celery", "Celery", LIBRARY),
    _exact("numpy", "NumPy", LIBRARY),
    _exact("pandas", "pandas", LIBRARY),
    _exact("scipy", "SciPy", LIBRARY),
    _exact("scikit-learn", "scikit-learn", LIBRARY),
    _exact("tensorflow", "TensorFlow", LIBRARY),
    _exact("torch", "PyTorch", LIBRARY),
    _exact("requests", "Requests", LIBRARY),
    _exact("httpx", "HTTPX", LIBRARY),
    _exact("redis", "Redis", LIBRARY),
    _prefix("psycopg", "PostgreSQL", LIBRARY),
    _exact("pymongo", "MongoDB", LIBRARY),
    _exact("structlog", "structlog", LIBRARY),
    _exact("click", "Click", LIBRARY),
    _exact("typer", "Typer", LIBRARY),
    _exact("rich", "Rich", LIBRARY),
    _exact("boto3", "AWS SDK", LIBRARY),
    # Build tools
    _exact("setuptools", "setuptools", BUILD_TOOL),
    _exact("poetry-core", "Poetry", BUILD_TOOL),
    _exact("poetry", "Poetry", BUILD_TOOL),
    _exact("hatchling", "Hatch", BUILD_TOOL),
    _exact("black", "Black", BUILD_TOOL),
    _exact("ruff", "Ruff", BUILD_TOOL),
    _exact("mypy", "mypy", BUILD_TOOL),
    _exact("flake8", "Flake8", BUILD_TOOL),
    _exact("isort", "isort", BUILD_TOOL),
    _exact("tox", "tox", BUILD_TOOL),
    # Testing
    _exact("pytest", "pytest", TESTING),
    _prefix("pytest-", "pytest", TESTING),
    _exact("hypothesis", "Hypothesis", TESTING),
    _exact("nose", "nose", TESTING),
    _exact("coverage", "Coverage.py", TESTING),
)

GO_RULES: Tuple[DependencyRule, ...] = (
    _prefix("github.com/gin-gonic/gin", "Gin", FRAMEWORK),
    _prefix("github.com/labstack/echo", "Echo", FRAMEWORK),
    _prefix("github.com/gofiber/fiber", "Fiber", FRAMEWORK),
    _prefix("github.com/go-chi/chi", "Chi", FRAMEWORK),
    _prefix("github.com/gorilla/mux", "Gorilla Mux", FRAMEWORK),
    _prefix("gorm.io/gorm", "GORM", LIBRARY),
    _prefix("google.golang.org/grpc", "gRPC", LIBRARY),
    _prefix("github.com/spf13/cobra", "Cobra", LIBRARY),
    _prefix("go.uber.org/zap", "Zap", LIBRARY),
    _prefix("github.com/stretchr/testify", "Testify", TESTING),
    _prefix("github.com/onsi/ginkgo", "Ginkgo", TESTING),
)

CARGO_RULES: Tuple[DependencyRule, ...] = (
    _exact("actix-web", "Actix Web", FRAMEWORK),
    _exact("axum", "Axum", FRAMEWORK),
    _exact("rocket", "Rocket", FRAMEWORK),
    _exact("warp", "Warp", FRAMEWORK),
    _exact("tauri", "Tauri", FRAMEWORK),
    _exact("tokio", "Tokio", LIBRARY),
    _exact("serde", "Serde", LIBRARY),
    _exact("diesel", "Diesel", LIBRARY),
    _exact("sqlx", "SQLx", LIBRARY),
    _exact("clap", "clap", LIBRARY),
    _exact("criterion", "Criterion", TESTING),
)

COMPOSER_RULES: Tuple[DependencyRule, ...] = (
    _exact("laravel/framework", "Laravel", FRAMEWORK),
    _prefix("symfony/", "Symfony", FRAMEWORK),
    _exact("slim/slim", "Slim", FRAMEWORK),
    _exact("doctrine/orm", "Doctrine", LIBRARY),
    _exact("guzzlehttp/guzzle", "Guzzle", LIBRARY),
    _exact("phpunit/phpunit", "PHPUnit", TESTING),
    _exact("pestphp/pest", "Pest", TESTING),
)

RUBYGEMS_RULES: Tuple[DependencyRule, ...] = (
    _exact("rails", "Ruby on Rails", FRAMEWORK),
    _exact("sinatra", "Sinatra", FRAMEWORK),
    _exact("hanami", "Hanami", FRAMEWORK),
    _exact("devise", "Devise", LIBRARY),
    _exact("sidekiq", "Sidekiq", LIBRARY),
    _exact("pg", "PostgreSQL", LIBRARY),
    _exact("react-rails", "React", FRAMEWORK),
    _exact("rubocop", "RuboCop", BUILD_TOOL),
    _prefix("rspec", "RSpec", TESTING),
    _exact("minitest", "Minitest", TESTING),
    _exact("capybara", "Capybara", TESTING),
)

MAVEN_RULES: Tuple[DependencyRule, ...] = (
    _prefix("org.springframework.boot", "Spring Boot", FRAMEWORK),
    _prefix("org.springframework", "Spring", FRAMEWORK),
    _prefix("io.quarkus", "Quarkus", FRAMEWORK),
    _prefix("io.micronaut", "Micronaut", FRAMEWORK),
    _prefix("io.ktor", "Ktor", FRAMEWORK),
    _prefix("androidx.", "Android Jetpack", LIBRARY),
    _prefix("org.hibernate", "Hibernate", LIBRARY),
    _exact("org.projectlombok:lombok", "Lombok", LIBRARY),
    _prefix("junit:junit", "JUnit", TESTING),
    _prefix("org.junit", "JUnit", TESTING),
    _prefix("org.mockito", "Mockito", TESTING),
    _prefix("org.testng", "TestNG", TESTING),
)

PUB_RULES: Tuple[DependencyRule, ...] = (
    _exact("flutter", "Flutter", FRAMEWORK),
    _exact("provider", "Provider", LIBRARY),
    _exact("flutter_bloc", "BLoC", LIBRARY),
    _exact("bloc", "BLoC", LIBRARY),
    _exact("riverpod", "Riverpod", LIBRARY),
    _exact("flutter_riverpod", "Riverpod", LIBRARY),
    _exact("get", "GetX", LIBRARY),
    _exact("dio", "Dio", LIBRARY),
    _exact("flutter_test", "Flutter Test", TESTING),
    _exact("mockito", "Mockito", TESTING),
)

ECOSYSTEM_RULES: Dict[str, Tuple[DependencyRule, ...]] = {
    "npm": NPM_RULES,
    "pypi": PYPI_RULES,
    "go": GO_RULES,
    "cargo": CARGO_RULES,
    "composer": COMPOSER_RULES,
    "rubygems": RUBYGEMS_RULES,
    "maven": MAVEN_RULES,
    "pub": PUB_RULES,
}


def normalize_dependency(ecosystem: str, name: str) -> str:
    """
    Canonical form of a declared dependency name.

    PyPI names are case-insensitive and treat '_', '.' and '-' alike.
    """
    name = name.strip()
    if ecosystem == "pypi":
        return re.sub(r"[-_.]+", "-", name).lower()
    if ecosystem in ("go", "maven"):
        return name
    return name.lower()


def match_dependency(ecosystem: str, name: str) -> Optional[DependencyRule]:
    """
    Find the technology a dependency maps to.

    Examples:
        >>> match_dependency("npm", "@nestjs/core").name
        'NestJS'
        >>> match_dependency("npm", "left-pad") is None
        True
    """
    rules = ECOSYSTEM_RULES.get(ecosystem, ())
    dependency = normalize_dependency(ecosystem, name)

    for rule in rules:
        if not rule.prefix and rule.match == dependency:
            return rule

    best: Optional[DependencyRule] = None
    for rule in rules:
        if rule.prefix and dependency.startswith(rule.match):
            if best is None or len(rule.match) > len(best.match):
                best = rule
    return best


@dataclass(frozen=True)
class MarkerRule:
    """
    Maps marker files or directories to a technology.

    file_pattern is matched against lowercase file base names; directories
    against directory relative paths.
    """

    name: str
    category: TechnologyCategory
    file_pattern: Optional[str] = None
    directories: Tuple[str, ...] = ()

    @property
    def regex(self) -> Optional[re.Pattern]:
        return re.compile(self.file_pattern) if self.file_pattern else None


_JS_EXT = r"\.(js|cjs|mjs|ts|cts|mts)"
_JS_CONFIG = _JS_EXT + "$"

MARKER_RULES: Tuple[MarkerRule, ...] = (
    # Frameworks
    MarkerRule("Next.js", FRAMEWORK, r"^next\.config" + _JS_CONFIG),
    MarkerRule("Nuxt.js", FRAMEWORK, r"^nuxt\.config" + _JS_CONFIG),
    MarkerRule("Angular", FRAMEWORK, r"^angular\.json$"),
    MarkerRule("Vue.js", FRAMEWORK, r"^vue\.config" + _JS_CONFIG),
    MarkerRule("Svelte", FRAMEWORK, r"^svelte\.config" + _JS_CONFIG),
    MarkerRule("Gatsby", FRAMEWORK, r"^gatsby-config" + _JS_CONFIG),
    MarkerRule("Remix", FRAMEWORK, r"^remix\.config" + _JS_CONFIG),
    MarkerRule("Astro", FRAMEWORK, r"^astro\.config" + _JS_CONFIG),
    MarkerRule("Django", FRAMEWORK, r"^manage\.py$"),
    MarkerRule("Ruby on Rails", FRAMEWORK, directories=("config/initializers",)),
    # Libraries
    MarkerRule("Tailwind CSS", LIBRARY, r"^tailwind\.config" + _JS_CONFIG),
    MarkerRule("Prisma", LIBRARY, r"^schema\.prisma$"),
    MarkerRule("Storybook", LIBRARY, directories=(".storybook",)),
    # Build tools
    MarkerRule("Vite", BUILD_TOOL, r"^vite\.config" + _JS_CONFIG),
    MarkerRule("Webpack", BUILD_TOOL, r"^webpack\.[\w.]*config" + _JS_CONFIG),
    MarkerRule("Rollup", BUILD_TOOL, r"^rollup\.config" + _JS_CONFIG),
    MarkerRule("Babel", BUILD_TOOL, r"^(\.babelrc(\.json|\.js)?|babel\.config\.(js|cjs|mjs|json))$"),
    MarkerRule("TypeScript", BUILD_TOOL, r"^tsconfig(\.[\w-]+)?\.json$"),
    MarkerRule("ESLint", BUILD_TOOL, r"^(\.eslintrc(\.\w+)?|eslint\.config" + _JS_EXT + r")$"),
    MarkerRule("Prettier", BUILD_TOOL, r"^\.prettierrc(\.\w+)?$"),
    MarkerRule("Docker", BUILD_TOOL, r"^(dockerfile(\..+)?|docker-compose[\w.-]*\.ya?ml|compose\.ya?ml)$"),
    MarkerRule("Make", BUILD_TOOL, r"^makefile$"),
    MarkerRule("CMake", BUILD_TOOL, r"^cmakelists\.txt$"),
    MarkerRule("Gradle", BUILD_TOOL, r"^(build\.gradle(\.kts)?|gradlew)$"),
    MarkerRule("Maven", BUILD_TOOL, r"^pom\.xml$"),
    MarkerRule("npm", BUILD_TOOL, r"^package-lock\.json$"),
    MarkerRule("Yarn", BUILD_TOOL, r"^yarn\.lock$"),
    MarkerRule("pnpm", BUILD_TOOL, r"^pnpm-(lock|workspace)\.yaml$"),
    MarkerRule("Bun", BUILD_TOOL, r"^bun\.lockb?$"),
    MarkerRule("Poetry", BUILD_TOOL, r"^poetry\.lock$"),
    MarkerRule("Pipenv", BUILD_TOOL, r"^pipfile(\.lock)?$"),
    MarkerRule("Cargo", BUILD_TOOL, r"^cargo\.(toml|lock)$"),
    MarkerRule("Bundler", BUILD_TOOL, r"^gemfile\.lock$"),
    MarkerRule("Composer", BUILD_TOOL, r"^composer\.lock$"),
    MarkerRule("Go Modules", BUILD_TOOL, r"^go\.mod$"),
    MarkerRule("Lerna", BUILD_TOOL, r"^lerna\.json$"),
    MarkerRule("Nx", BUILD_TOOL, r"^nx\.json$"),
    MarkerRule("Turborepo", BUILD_TOOL, r"^turbo\.json$"),
    MarkerRule("GitHub Actions", BUILD_TOOL, directories=(".github/workflows",)),
    # Testing
    MarkerRule("Jest", TESTING, r"^jest\.config(" + _JS_EXT + r"|\.json)$"),
    MarkerRule("Vitest", TESTING, r"^vitest\.(config|workspace)" + _JS_CONFIG),
    MarkerRule("Cypress", TESTING, r"^cypress(\.config" + _JS_EXT + r"|\.json)$", directories=("cypress",)),
    MarkerRule("Playwright", TESTING, r"^playwright\.config" + _JS_CONFIG),
    MarkerRule("Karma", TESTING, r"^karma\.conf" + _JS_CONFIG),
    MarkerRule("pytest", TESTING, r"^(pytest\.ini|conftest\.py)$"),
    MarkerRule("RSpec", TESTING, r"^\.rspec$"),
)


@dataclass(frozen=True)
class StackDefinition:
    """
    A named combination of technologies.

    Each member is a tuple of alternatives; one of them must be detected.
    """

    name: str
    members: Tuple[Tuple[str, ...], ...]


STACK_DEFINITIONS: Tuple[StackDefinition, ...] = (
    StackDefinition("MERN", (("MongoDB",), ("Express",), ("React",))),
    StackDefinition("MEAN", (("MongoDB",), ("Express",), ("Angular",))),
    StackDefinition("MEVN", (("MongoDB",), ("Express",), ("Vue.js",))),
    StackDefinition("PERN", (("PostgreSQL",), ("Express",), ("React",))),
    StackDefinition("T3 Stack", (("Next.js",), ("tRPC",), ("Tailwind CSS",), ("Prisma", "Drizzle"))),
    StackDefinition("Django REST", (("Django",), ("Django REST Framework",))),
    StackDefinition("Rails + React", (("Ruby on Rails",), ("React",))),
    StackDefinition("FastAPI + SQLAlchemy", (("FastAPI",), ("SQLAlchemy",))),
    StackDefinition("Spring Boot + Hibernate", (("Spring Boot",), ("Hibernate",))),
)


def detect_stacks(technologies: set[str]) -> list[str]:
    """Names of all stacks whose members are all present, sorted."""
    return sorted(
        stack.name
        for stack in STACK_DEFINITIONS
        if all(any(alt in technologies for alt in member) for member in stack.members)
    )
