"""
File discovery module.

Walks a project tree, applies ignore patterns and classifies every file.
"""

from projectlens.analysis.application.discovery.classifier import FileClassifier
from projectlens.analysis.application.discovery.traverser import FileTraverser, TraversalResult

__all__ = ["FileClassifier", "FileTraverser", "TraversalResult"]
