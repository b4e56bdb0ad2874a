"""
Language definitions and metadata.
"""

from enum import Enum

from pydantic import BaseModel


class CodeLanguage(str, Enum):
    """Closed set of source languages recognized from file extensions."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    VUE = "vue"
    SVELTE = "svelte"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    KOTLIN = "kotlin"
    SCALA = "scala"
    SWIFT = "swift"
    DART = "dart"
    RUBY = "ruby"
    PHP = "php"
    C = "c"
    CPP = "cpp"
    CSHARP = "csharp"
    SHELL = "shell"
    UNKNOWN = "unknown"


class LanguageDefinition(BaseModel):
    """Rich metadata for a programming language."""

    name: str  # Display name used in TechStackProfile
    id: CodeLanguage
    extensions: set[str]


# Central Registry of Language Metadata
LANGUAGE_DEFINITIONS: list[LanguageDefinition] = [
    LanguageDefinition(
        name="Python",
        id=CodeLanguage.PYTHON,
        extensions={".py", ".pyw", ".pyi"},
    ),
    LanguageDefinition(
        name="JavaScript",
        id=CodeLanguage.JAVASCRIPT,
        extensions={".js", ".jsx", ".mjs", ".cjs"},
    ),
    LanguageDefinition(
        name="TypeScript",
        id=CodeLanguage.TYPESCRIPT,
        extensions={".ts", ".tsx", ".mts", ".cts"},
    ),
    LanguageDefinition(
        name="Vue",
        id=CodeLanguage.VUE,
        extensions={".vue"},
    ),
    LanguageDefinition(
        name="Svelte",
        id=CodeLanguage.SVELTE,
        extensions={".svelte"},
    ),
    LanguageDefinition(
        name="Go",
        id=CodeLanguage.GO,
        extensions={".go"},
    ),
    LanguageDefinition(
        name="Rust",
        id=CodeLanguage.RUST,
        extensions={".rs"},
    ),
    LanguageDefinition(
        name="Java",
        id=CodeLanguage.JAVA,
        extensions={".java"},
    ),
    LanguageDefinition(
        name="Kotlin",
        id=CodeLanguage.KOTLIN,
        extensions={".kt", ".kts"},
    ),
    LanguageDefinition(
        name="Scala",
        id=CodeLanguage.SCALA,
        extensions={".scala", ".sc"},
    ),
    LanguageDefinition(
        name="Swift",
        id=CodeLanguage.SWIFT,
        extensions={".swift"},
    ),
    LanguageDefinition(
        name="Dart",
        id=CodeLanguage.DART,
        extensions={".dart"},
    ),
    LanguageDefinition(
        name="Ruby",
        id=CodeLanguage.RUBY,
        extensions={".rb", ".rake"},
    ),
    LanguageDefinition(
        name="PHP",
        id=CodeLanguage.PHP,
        extensions={".php"},
    ),
    LanguageDefinition(
        name="C",
        id=CodeLanguage.C,
        extensions={".c", ".h"},
    ),
    LanguageDefinition(
        name="C++",
        id=CodeLanguage.CPP,
        extensions={".cpp", ".cc", ".cxx", ".hpp", ".hxx", ".hh"},
    ),
    LanguageDefinition(
        name="C#",
        id=CodeLanguage.CSHARP,
        extensions={".cs"},
    ),
    LanguageDefinition(
        name="Shell",
        id=CodeLanguage.SHELL,
        extensions={".sh", ".bash", ".zsh"},
    ),
]
