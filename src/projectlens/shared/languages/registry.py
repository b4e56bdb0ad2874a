"""
Central Language Registry.

Provides unified access to language metadata and extension lookup.
"""

from typing import Dict, Optional, Set

from projectlens.shared.languages.definitions import LANGUAGE_DEFINITIONS, CodeLanguage, LanguageDefinition


class LanguageRegistry:
    """
    Central registry for language-related operations.
    Unifies extension mapping and metadata.
    """

    _definitions: Dict[CodeLanguage, LanguageDefinition] = {d.id: d for d in LANGUAGE_DEFINITIONS}
    _extension_map: Dict[str, CodeLanguage] = {
        ext.lower(): d.id for d in LANGUAGE_DEFINITIONS for ext in d.extensions
    }

    @classmethod
    def get_language_from_extension(cls, extension: str) -> CodeLanguage:
        """Detect language from a lowercase extension (with dot)."""
        return cls._extension_map.get(extension.lower(), CodeLanguage.UNKNOWN)

    @classmethod
    def get_definition(cls, lang: CodeLanguage) -> Optional[LanguageDefinition]:
        """Get rich metadata for a language."""
        return cls._definitions.get(lang)

    @classmethod
    def get_display_name(cls, lang: CodeLanguage) -> str | None:
        """Display name ("TypeScript"), or None for unknown languages."""
        defn = cls.get_definition(lang)
        return defn.name if defn else None

    @classmethod
    def get_all_supported_extensions(cls) -> Set[str]:
        """Get all extensions recognized as source code."""
        return set(cls._extension_map.keys())
