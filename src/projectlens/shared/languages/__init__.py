"""Language definitions and extension lookup."""

from projectlens.shared.languages.definitions import CodeLanguage, LanguageDefinition
from projectlens.shared.languages.registry import LanguageRegistry

__all__ = ["CodeLanguage", "LanguageDefinition", "LanguageRegistry"]
