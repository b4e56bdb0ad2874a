"""Shared test fixtures for ProjectLens Core test suite."""

from pathlib import Path

import pytest

from projectlens.analysis.application.discovery.traverser import FileTraverser
from projectlens.analysis.domain.structure import ProjectStructure


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """
    Create files (and their parent directories) under root.

    A key ending in '/' creates an empty directory.
    """
    for relative_path, content in files.items():
        target = root / relative_path
        if relative_path.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


def scan_structure(root: Path, ignore_patterns: list[str] | None = None) -> ProjectStructure:
    """Traverse a tree synchronously and return its structure."""
    return FileTraverser(root, ignore_patterns or []).traverse().structure


@pytest.fixture
def project_root(tmp_path):
    """Create a temporary project root directory."""
    root = tmp_path / "sample-project"
    root.mkdir()
    return root


@pytest.fixture
def make_tree(project_root):
    """Factory writing a file mapping into the temporary project root."""

    def _make(files: dict[str, str]) -> Path:
        return write_tree(project_root, files)

    return _make


@pytest.fixture
def react_project(make_tree):
    """A small React + Express TypeScript project."""
    return make_tree(
        {
            "package.json": (
                '{"name": "shop", "dependencies": {"react": "^18.2.0", "express": "^4.18.0", '
                '"mongoose": "^7.0.0"}, "devDependencies": {"jest": "^29.0.0", "typescript": "^5.0.0"}}'
            ),
            "tsconfig.json": "{}",
            "README.md": "# Shop\n",
            "src/index.ts": (
                "import { createServer } from './server';\n"
                "import { formatPrice } from './utils/format';\n"
                "const port = 3000;\n"
                "createServer(port);\n"
            ),
            "src/server.ts": (
                "import express from 'express';\n"
                "import { formatPrice } from './utils/format';\n"
                "export const createServer = (port: number) => {\n"
                "  const app = express();\n"
                "  app.get('/price', async (req, res) => res.send(formatPrice(10)));\n"
                "  return app.listen(port);\n"
                "};\n"
            ),
            "src/utils/format.ts": (
                "export function formatPrice(amount: number): string {\n"
                "  const currencySymbol = '$';\n"
                "  return `${currencySymbol}${amount}`;\n"
                "}\n"
            ),
            "src/components/ProductCard.tsx": (
                "import React, { useState } from 'react';\n"
                "import { formatPrice } from '../utils/format';\n"
                "export const ProductCard = ({ price }: { price: number }) => {\n"
                "  const [isOpen, setIsOpen] = useState(false);\n"
                "  return (<div>{formatPrice(price)}</div>);\n"
                "};\n"
            ),
            "src/components/ProductCard.test.tsx": "import { ProductCard } from './ProductCard';\n",
            "src/styles/main.css": "body { margin: 0; }\n",
            "node_modules/react/index.js": "module.exports = {};\n",
            "dist/bundle.js": "var a = 1;\n",
        }
    )


@pytest.fixture
def scan():
    """Traverse helper: scan(root, ignore_patterns=None) -> ProjectStructure."""
    return scan_structure


@pytest.fixture
def ascan():
    """Async traverse helper for tests already running inside an event loop."""

    async def _scan(root: Path, ignore_patterns: list[str] | None = None) -> ProjectStructure:
        result = await FileTraverser(root, ignore_patterns or []).traverse_async()
        return result.structure

    return _scan
