"""
Lexical extractors.

One pure function per language maps a content sample to the identifiers,
import references and idioms it contains. Extraction is regex based and
best effort; there is no attempt at language-complete parsing.

Dispatch is an explicit strategy map keyed by CodeLanguage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from projectlens.analysis.domain.dependency_graph import EdgeKind
from projectlens.shared.languages.definitions import CodeLanguage


@dataclass(frozen=True)
class ImportReference:
    """A raw module specifier as written in the source."""

    specifier: str
    kind: EdgeKind = EdgeKind.STATIC_IMPORT
    names: tuple[str, ...] = ()  # Imported names of `from x import a, b`


@dataclass
class ExtractionResult:
    """Everything the profilers need from one file."""

    variables: List[str] = field(default_factory=list)
    functions: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    imports: List[ImportReference] = field(default_factory=list)
    idioms: set[str] = field(default_factory=set)


Extractor = Callable[[str], ExtractionResult]

_FLAGS = re.MULTILINE

_CONTROL_KEYWORDS = frozenset(
    {"if", "for", "while", "switch", "catch", "return", "sizeof", "foreach", "using", "lock", "new", "else"}
)


def _names(pattern: re.Pattern, content: str, group: int = 1) -> List[str]:
    return [m.group(group) for m in pattern.finditer(content) if m.group(group)]


def _detect_idioms(content: str, rules: Dict[str, re.Pattern], result: ExtractionResult) -> None:
    for idiom, pattern in rules.items():
        if pattern.search(content):
            result.idioms.add(idiom)


# Python

_PY_CLASS = re.compile(r"^[ \t]*class[ \t]+([A-Za-z_]\w*)", _FLAGS)
_PY_FUNCTION = re.compile(r"^[ \t]*(?:async[ \t]+)?def[ \t]+([A-Za-z_]\w*)", _FLAGS)
_PY_VARIABLE = re.compile(r"^[ \t]*([A-Za-z_]\w*)[ \t]*(?::[^=\n]+)?=(?!=)", _FLAGS)
_PY_IMPORT = re.compile(r"^[ \t]*import[ \t]+([^\n#;]+)", _FLAGS)
_PY_FROM_IMPORT = re.compile(r"^[ \t]*from[ \t]+(\.*[\w.]*)[ \t]+import[ \t]+(\([^)]*\)|[^\n#;]+)", _FLAGS)
_PY_DYNAMIC = re.compile(r"""(?:importlib\.import_module|__import__)\(\s*['"]([\w.]+)['"]""")

_PY_IDIOMS = {
    "Dataclasses": re.compile(r"^[ \t]*@(?:dataclasses\.)?dataclass\b", _FLAGS),
    "Type Hints": re.compile(r"\)[ \t]*->[ \t]*[\w\[\"']"),
    "Context Managers": re.compile(r"^[ \t]*(?:async[ \t]+)?with[ \t]+", _FLAGS),
    "Async/Await": re.compile(r"\basync[ \t]+def\b|\bawait\b"),
    "Decorators": re.compile(r"^[ \t]*@(?!(?:dataclasses\.)?dataclass\b)[A-Za-z_][\w.]*", _FLAGS),
    "List Comprehensions": re.compile(r"\[[^\]\n]+\bfor\b[^\]\n]+\bin\b[^\]\n]+\]"),
    "Pydantic Models": re.compile(r"^[ \t]*class[ \t]+\w+\((?:[\w.]*\.)?BaseModel\)", _FLAGS),
    "Generators": re.compile(r"^[ \t]*yield\b", _FLAGS),
}


def _split_import_names(clause: str) -> tuple[str, ...]:
    """Names of an import clause, with aliases and '*' removed."""
    names = []
    for part in clause.strip().strip("()").replace("\n", " ").split(","):
        name = part.strip().split()[0] if part.strip() else ""
        if name and name != "*" and name.isidentifier():
            names.append(name)
    return tuple(names)


def extract_python(content: str) -> ExtractionResult:
    result = ExtractionResult(
        variables=_names(_PY_VARIABLE, content),
        functions=_names(_PY_FUNCTION, content),
        classes=_names(_PY_CLASS, content),
    )

    for match in _PY_IMPORT.finditer(content):
        for part in match.group(1).split(","):
            module = part.strip().split()[0] if part.strip() else ""
            if module:
                result.imports.append(ImportReference(module))
    for match in _PY_FROM_IMPORT.finditer(content):
        result.imports.append(ImportReference(match.group(1), names=_split_import_names(match.group(2))))
    for module in _names(_PY_DYNAMIC, content):
        result.imports.append(ImportReference(module, EdgeKind.DYNAMIC_IMPORT))

    _detect_idioms(content, _PY_IDIOMS, result)
    return result


# JavaScript / TypeScript

_JS_ID = r"[A-Za-z_$][\w$]*"
_JS_CLASS = re.compile(rf"\bclass\s+({_JS_ID})")
_JS_FUNCTION = re.compile(rf"\bfunction\s*\*?\s*({_JS_ID})\s*[<(]")
_JS_ARROW = re.compile(
    rf"\b(?:const|let|var)\s+({_JS_ID})\s*(?::[^=\n]+)?=\s*(?:async\s*)?(?:\([^)]*\)|{_JS_ID})\s*(?::[^=\n]+)?=>"
)
_JS_VARIABLE = re.compile(rf"\b(?:const|let|var)\s+({_JS_ID})\s*(?::[^=\n;]+)?=")
_JS_STATIC_IMPORT = re.compile(r"""^\s*import\s+(?:type\s+)?[\w*${}\s,]+?\s+from\s+['"]([^'"]+)['"]""", _FLAGS)
_JS_SIDE_EFFECT_IMPORT = re.compile(r"""^\s*import\s+['"]([^'"]+)['"]""", _FLAGS)
_JS_REEXPORT = re.compile(r"""^\s*export\s+(?:type\s+)?[\w*${}\s,]+?\s+from\s+['"]([^'"]+)['"]""", _FLAGS)
_JS_DYNAMIC_IMPORT = re.compile(r"""\bimport\(\s*['"]([^'"]+)['"]\s*\)""")
_JS_REQUIRE = re.compile(r"""\brequire\(\s*['"]([^'"]+)['"]\s*\)""")

_JS_IDIOMS = {
    "ES Modules": re.compile(r"^\s*(?:import|export)\s", _FLAGS),
    "CommonJS": re.compile(r"\brequire\(|\bmodule\.exports\b"),
    "Async/Await": re.compile(r"\basync\s+(?:function\b|\(|[A-Za-z_$])|\bawait\s"),
    "Promises": re.compile(r"\.then\(|\bnew Promise\("),
    "Arrow Functions": re.compile(r"=>"),
    "React Hooks": re.compile(r"\buse(?:State|Effect|Context|Reducer|Callback|Memo|Ref|LayoutEffect)\s*[<(]"),
    "JSX": re.compile(r"<[A-Z]\w*[\s/>]|return\s*\(\s*<"),
    "Express Routing": re.compile(r"\b(?:app|router)\.(?:get|post|put|patch|delete|use)\(\s*['\"/]"),
}

# Capitalized function or arrow const, counted as a component when the file returns JSX
_JS_COMPONENT = re.compile(
    r"^\s*(?:export\s+)?(?:default\s+)?(?:"
    r"function\s+[A-Z]\w*\s*(?:<[^>]*>)?\s*\("
    r"|(?:const|let)\s+[A-Z]\w*\s*(?::[^=\n]+)?=\s*(?:async\s+)?(?:\([^)]*\)|\w+)\s*(?::[^=\n]+)?=>"
    r")",
    _FLAGS,
)
_JSX_RETURN = re.compile(r"(?:\breturn|=>)\s*\(?\s*<(?:[A-Za-z]|>)")

_TS_INTERFACE = re.compile(rf"^\s*(?:export\s+)?(?:declare\s+)?interface\s+({_JS_ID})", _FLAGS)
_TS_TYPE_ALIAS = re.compile(rf"^\s*(?:export\s+)?(?:declare\s+)?type\s+({_JS_ID})\s*(?:<[^=]*>)?\s*=", _FLAGS)
_TS_ENUM = re.compile(rf"^\s*(?:export\s+)?(?:const\s+)?enum\s+({_JS_ID})", _FLAGS)
_TS_GENERIC = re.compile(r"<[A-Z][\w\s,|&\[\]]*>")

_TS_IDIOMS = {
    "Angular Decorators": re.compile(r"@(?:Component|NgModule|Injectable|Directive|Pipe)\("),
    "NestJS Decorators": re.compile(r"@(?:Controller|Module|Injectable|Get|Post|Put|Delete)\("),
    "TypeORM": re.compile(r"@(?:Entity|Column|PrimaryGeneratedColumn|Repository|ManyToOne|OneToMany)\("),
    "Type Guards": re.compile(r"\)\s*:\s*\w+\s+is\s+[A-Z]\w*"),
    "Utility Types": re.compile(r"\b(?:Partial|Required|Readonly|Record|Pick|Omit|Exclude|Extract|ReturnType)<"),
    "React with TypeScript": re.compile(r"\bReact\.FC\b|\bFC<|\bReact\.FunctionComponent\b"),
    "Mapped Types": re.compile(r"\[\s*\w+\s+in\s+keyof\b"),
    "Interfaces": re.compile(r"^\s*(?:export\s+)?interface\s", _FLAGS),
}

_HEAVY_GENERIC_THRESHOLD = 5


def extract_javascript(content: str) -> ExtractionResult:
    functions = _names(_JS_FUNCTION, content) + _names(_JS_ARROW, content)
    arrow_names = set(_names(_JS_ARROW, content))
    result = ExtractionResult(
        variables=[v for v in _names(_JS_VARIABLE, content) if v not in arrow_names],
        functions=functions,
        classes=_names(_JS_CLASS, content),
    )

    for pattern in (_JS_STATIC_IMPORT, _JS_SIDE_EFFECT_IMPORT, _JS_REEXPORT):
        result.imports.extend(ImportReference(s) for s in _names(pattern, content))
    result.imports.extend(ImportReference(s, EdgeKind.DYNAMIC_IMPORT) for s in _names(_JS_DYNAMIC_IMPORT, content))
    result.imports.extend(ImportReference(s, EdgeKind.REQUIRE) for s in _names(_JS_REQUIRE, content))

    _detect_idioms(content, _JS_IDIOMS, result)
    if _JS_COMPONENT.search(content) and _JSX_RETURN.search(content):
        result.idioms.add("React Components")
    return result


def extract_typescript(content: str) -> ExtractionResult:
    """JavaScript extraction plus interfaces, type aliases, enums and TS idioms."""
    result = extract_javascript(content)
    result.classes.extend(_names(_TS_INTERFACE, content))
    result.classes.extend(_names(_TS_TYPE_ALIAS, content))
    result.classes.extend(_names(_TS_ENUM, content))

    _detect_idioms(content, _TS_IDIOMS, result)
    if len(_TS_GENERIC.findall(content)) > _HEAVY_GENERIC_THRESHOLD:
        result.idioms.add("Heavy Generic Usage")
    return result


_SFC_SCRIPT = re.compile(r"<script\b[^>]*>(.*?)</script>", re.DOTALL | re.IGNORECASE)


def extract_single_file_component(content: str) -> ExtractionResult:
    """Vue / Svelte: extract the <script> blocks as TypeScript."""
    script = "\n".join(m.group(1) for m in _SFC_SCRIPT.finditer(content))
    result = extract_typescript(script)
    result.idioms.add("Single-File Components")
    return result


# Go

_GO_FUNCTION = re.compile(r"^func\s+(?:\([^)]*\)\s*)?([A-Za-z_]\w*)", _FLAGS)
_GO_TYPE = re.compile(r"^\s*type\s+([A-Za-z_]\w*)\s+(?:struct|interface)\b", _FLAGS)
_GO_VARIABLE = re.compile(r"\b([A-Za-z_]\w*)\s*:=|^\s*(?:var|const)\s+([A-Za-z_]\w*)", _FLAGS)
_GO_IMPORT_SINGLE = re.compile(r'^\s*import\s+(?:[\w.]+\s+)?"([^"]+)"', _FLAGS)
_GO_IMPORT_BLOCK = re.compile(r"^\s*import\s*\((.*?)\)", re.MULTILINE | re.DOTALL)
_GO_QUOTED = re.compile(r'"([^"]+)"')

_GO_IDIOMS = {
    "Goroutines": re.compile(r"\bgo\s+(?:func\b|[A-Za-z_][\w.]*\()"),
    "Channels": re.compile(r"\bchan\b|<-"),
    "Error Wrapping": re.compile(r"\bif\s+err\s*!=\s*nil\b"),
    "Interfaces": re.compile(r"\btype\s+\w+\s+interface\b"),
    "Defer": re.compile(r"^\s*defer\s", _FLAGS),
    "Context Propagation": re.compile(r"\bctx\s+context\.Context\b"),
}


def extract_go(content: str) -> ExtractionResult:
    variables = [a or b for a, b in _GO_VARIABLE.findall(content) if (a or b) and (a or b) != "_"]
    result = ExtractionResult(
        variables=variables,
        functions=_names(_GO_FUNCTION, content),
        classes=_names(_GO_TYPE, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_GO_IMPORT_SINGLE, content))
    for block in _GO_IMPORT_BLOCK.finditer(content):
        result.imports.extend(ImportReference(s) for s in _GO_QUOTED.findall(block.group(1)))
    _detect_idioms(content, _GO_IDIOMS, result)
    return result


# Java / Kotlin / C#

_JVM_CLASS = re.compile(
    r"\b(?:class|interface|enum|record|object)\s+([A-Za-z_]\w*)"
)
_JAVA_METHOD = re.compile(
    r"^\s*(?:(?:public|private|protected|static|final|abstract|synchronized|override|async|virtual)\s+)+"
    r"[\w<>\[\],.? \t]+?[ \t]+([A-Za-z_]\w*)\s*\(",
    _FLAGS,
)
_JAVA_FIELD = re.compile(
    r"^\s*(?:(?:public|private|protected|static|final|readonly|const)\s+)*"
    r"(?:[A-Z][\w<>\[\],.?]*|int|long|double|float|boolean|char|byte|short|var|string|bool|decimal)\s+"
    r"([A-Za-z_]\w*)\s*(?:=|;)",
    _FLAGS,
)
_JAVA_IMPORT = re.compile(r"^\s*import\s+(?:static\s+)?([\w.]+(?:\.\*)?)\s*;", _FLAGS)

_JAVA_IDIOMS = {
    "Annotations": re.compile(r"^\s*@[A-Z]\w*", _FLAGS),
    "Spring Annotations": re.compile(r"@(?:RestController|Controller|Service|Repository|Component|Autowired)\b"),
    "JPA Entities": re.compile(r"@(?:Entity|Table|Id|Column)\b"),
    "Streams": re.compile(r"\.stream\(\)"),
    "Lambdas": re.compile(r"\)\s*->|\b\w+\s*->"),
    "Generics": re.compile(r"\b[A-Z]\w*<[A-Z?]"),
    "Lombok": re.compile(r"@(?:Data|Builder|Getter|Setter|RequiredArgsConstructor|AllArgsConstructor)\b"),
}


def extract_java(content: str) -> ExtractionResult:
    result = ExtractionResult(
        variables=_names(_JAVA_FIELD, content),
        functions=[f for f in _names(_JAVA_METHOD, content) if f not in _CONTROL_KEYWORDS],
        classes=_names(_JVM_CLASS, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_JAVA_IMPORT, content))
    _detect_idioms(content, _JAVA_IDIOMS, result)
    return result


_KT_FUNCTION = re.compile(r"\bfun\s+(?:<[^>]+>\s*)?(?:[\w.]+\.)?([A-Za-z_]\w*)\s*\(")
_KT_VARIABLE = re.compile(r"\b(?:val|var)\s+([A-Za-z_]\w*)")
_KT_IMPORT = re.compile(r"^\s*import\s+([\w.]+(?:\.\*)?)", _FLAGS)

_KT_IDIOMS = {
    "Coroutines": re.compile(r"\bsuspend\s+fun\b|\blaunch\s*\{|\basync\s*\{"),
    "Data Classes": re.compile(r"\bdata\s+class\b"),
    "Extension Functions": re.compile(r"\bfun\s+(?:<[^>]+>\s*)?[A-Z]\w*(?:<[^>]*>)?\.\w+\s*\("),
    "Null Safety": re.compile(r"\?\.|\?:"),
    "Sealed Classes": re.compile(r"\bsealed\s+(?:class|interface)\b"),
    "Jetpack Compose": re.compile(r"@Composable\b"),
}


def extract_kotlin(content: str) -> ExtractionResult:
    result = ExtractionResult(
        variables=_names(_KT_VARIABLE, content),
        functions=_names(_KT_FUNCTION, content),
        classes=_names(_JVM_CLASS, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_KT_IMPORT, content))
    _detect_idioms(content, _KT_IDIOMS, result)
    return result


_CS_USING = re.compile(r"^\s*using\s+(?:static\s+)?([\w.]+)\s*;", _FLAGS)
_CS_PROPERTY = re.compile(
    r"^\s*(?:(?:public|private|protected|internal|static|virtual|override)\s+)+[\w<>\[\],.?]+\s+([A-Za-z_]\w*)\s*\{\s*get",
    _FLAGS,
)

_CS_IDIOMS = {
    "Async/Await": re.compile(r"\basync\s+Task\b|\bawait\s"),
    "LINQ": re.compile(r"\.(?:Where|Select|OrderBy|GroupBy|FirstOrDefault)\("),
    "Properties": re.compile(r"\{\s*get;"),
    "Attributes": re.compile(r"^\s*\[[A-Z]\w*(?:\(|\])", _FLAGS),
    "Dependency Injection": re.compile(r"\bI[A-Z]\w+\s+_\w+"),
}


def extract_csharp(content: str) -> ExtractionResult:
    properties = set(_names(_CS_PROPERTY, content))
    methods = [f for f in _names(_JAVA_METHOD, content) if f not in _CONTROL_KEYWORDS and f not in properties]
    result = ExtractionResult(
        variables=_names(_JAVA_FIELD, content),
        functions=methods,
        classes=_names(_JVM_CLASS, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_CS_USING, content))
    _detect_idioms(content, _CS_IDIOMS, result)
    return result


# Ruby

_RB_CLASS = re.compile(r"^\s*(?:class|module)\s+([A-Z]\w*)", _FLAGS)
_RB_FUNCTION = re.compile(r"^\s*def\s+(?:self\.)?([A-Za-z_]\w*[?!=]?)", _FLAGS)
_RB_VARIABLE = re.compile(r"^\s*@{0,2}([a-z_]\w*)\s*=(?!=|~)", _FLAGS)
_RB_CONSTANT = re.compile(r"^\s*([A-Z][A-Z0-9_]*)\s*=(?!=)", _FLAGS)
_RB_REQUIRE = re.compile(r"""^\s*require\s*\(?\s*['"]([^'"]+)['"]""", _FLAGS)
_RB_REQUIRE_RELATIVE = re.compile(r"""^\s*require_relative\s*\(?\s*['"]([^'"]+)['"]""", _FLAGS)

_RB_IDIOMS = {
    "Blocks": re.compile(r"\bdo\s*\|[^|]*\||\{\s*\|[^|]*\|"),
    "Mixins": re.compile(r"^\s*(?:include|extend|prepend)\s+[A-Z]", _FLAGS),
    "ActiveRecord": re.compile(r"<\s*(?:ApplicationRecord|ActiveRecord::Base)\b|\b(?:has_many|belongs_to|has_one)\s+:"),
    "Metaprogramming": re.compile(r"\b(?:define_method|method_missing|send|instance_variable_get)\b"),
    "Attribute Accessors": re.compile(r"^\s*attr_(?:accessor|reader|writer)\b", _FLAGS),
}


def extract_ruby(content: str) -> ExtractionResult:
    functions = [f.rstrip("?!=") for f in _names(_RB_FUNCTION, content)]
    result = ExtractionResult(
        variables=_names(_RB_VARIABLE, content) + _names(_RB_CONSTANT, content),
        functions=functions,
        classes=_names(_RB_CLASS, content),
    )
    result.imports.extend(ImportReference(s, EdgeKind.REQUIRE) for s in _names(_RB_REQUIRE, content))
    for target in _names(_RB_REQUIRE_RELATIVE, content):
        # Relative to the requiring file
        result.imports.append(ImportReference(target if target.startswith(".") else f"./{target}", EdgeKind.REQUIRE))
    _detect_idioms(content, _RB_IDIOMS, result)
    return result


# Rust

_RS_FUNCTION = re.compile(r"^\s*(?:pub(?:\([\w:]+\))?\s+)?(?:const\s+)?(?:async\s+)?(?:unsafe\s+)?fn\s+([A-Za-z_]\w*)", _FLAGS)
_RS_TYPE = re.compile(r"^\s*(?:pub(?:\([\w:]+\))?\s+)?(?:struct|enum|trait|union)\s+([A-Za-z_]\w*)", _FLAGS)
_RS_VARIABLE = re.compile(r"\blet\s+(?:mut\s+)?([A-Za-z_]\w*)|^\s*(?:pub\s+)?(?:const|static)\s+([A-Za-z_]\w*)", _FLAGS)
_RS_MOD = re.compile(r"^\s*(?:pub(?:\([\w:]+\))?\s+)?mod\s+([A-Za-z_]\w*)\s*;", _FLAGS)
_RS_USE = re.compile(r"^\s*(?:pub\s+)?use\s+((?:crate|self|super)::[\w:]+)", _FLAGS)

_RS_IDIOMS = {
    "Traits": re.compile(r"\bimpl(?:<[^>]*>)?\s+\w+(?:<[^>]*>)?\s+for\b"),
    "Pattern Matching": re.compile(r"\bmatch\s+[^{]+\{"),
    "Result Error Handling": re.compile(r"\bResult<|\?;"),
    "Async/Await": re.compile(r"\basync\s+fn\b|\.await\b"),
    "Derive Macros": re.compile(r"#\[derive\("),
    "Lifetimes": re.compile(r"<'[a-z]\w*"),
}


def extract_rust(content: str) -> ExtractionResult:
    variables = [a or b for a, b in _RS_VARIABLE.findall(content) if (a or b) and (a or b) != "_"]
    result = ExtractionResult(
        variables=variables,
        functions=_names(_RS_FUNCTION, content),
        classes=_names(_RS_TYPE, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_RS_MOD, content))
    result.imports.extend(ImportReference(s) for s in _names(_RS_USE, content))
    _detect_idioms(content, _RS_IDIOMS, result)
    return result


# C / C++

_C_FUNCTION = re.compile(
    r"^[ \t]*(?:static\s+|inline\s+|extern\s+|virtual\s+|const\s+)*[A-Za-z_][\w:<>*& \t]*?[ \t*&]+([A-Za-z_]\w*)\s*\([^;{]*\)\s*(?:const\s*)?\{",
    _FLAGS,
)
_C_TYPE = re.compile(r"\b(?:struct|class|union|enum(?:\s+class)?)\s+([A-Za-z_]\w*)\s*(?::[^{;]+)?\{")
_C_DEFINE = re.compile(r"^\s*#\s*define\s+([A-Za-z_]\w*)", _FLAGS)
_C_INCLUDE_LOCAL = re.compile(r'^\s*#\s*include\s+"([^"]+)"', _FLAGS)

_C_IDIOMS = {
    "Preprocessor Macros": re.compile(r"^\s*#\s*define\s", _FLAGS),
    "Include Guards": re.compile(r"^\s*#\s*(?:ifndef\s+\w+_H\w*|pragma\s+once)", _FLAGS),
    "Manual Memory Management": re.compile(r"\b(?:malloc|calloc|free)\s*\("),
}

_CPP_IDIOMS = {
    "Templates": re.compile(r"\btemplate\s*<"),
    "Smart Pointers": re.compile(r"\b(?:std::)?(?:unique_ptr|shared_ptr|make_unique|make_shared)\b"),
    "Namespaces": re.compile(r"^\s*namespace\s+\w+", _FLAGS),
    "RAII": re.compile(r"\b(?:std::)?(?:lock_guard|unique_lock|scoped_lock)\b"),
    "Lambdas": re.compile(r"\[[&=]?\]\s*\("),
}


def extract_c(content: str) -> ExtractionResult:
    result = ExtractionResult(
        variables=_names(_C_DEFINE, content),
        functions=[f for f in _names(_C_FUNCTION, content) if f not in _CONTROL_KEYWORDS],
        classes=_names(_C_TYPE, content),
    )
    result.imports.extend(ImportReference(s) for s in _names(_C_INCLUDE_LOCAL, content))
    _detect_idioms(content, _C_IDIOMS, result)
    return result


def extract_cpp(content: str) -> ExtractionResult:
    result = extract_c(content)
    _detect_idioms(content, _CPP_IDIOMS, result)
    return result


# PHP

_PHP_CLASS = re.compile(r"^\s*(?:abstract\s+|final\s+)?(?:class|interface|trait|enum)\s+([A-Za-z_]\w*)", _FLAGS)
_PHP_FUNCTION = re.compile(r"\bfunction\s+&?([A-Za-z_]\w*)\s*\(")
_PHP_VARIABLE = re.compile(r"\$([A-Za-z_]\w*)\s*=(?!=|>)")
_PHP_INCLUDE = re.compile(r"""\b(?:require|include)(?:_once)?\s*\(?\s*(?:__DIR__\s*\.\s*)?['"]([^'"]+)['"]""")

_PHP_IDIOMS = {
    "Namespaces": re.compile(r"^\s*namespace\s+[\w\\]+\s*;", _FLAGS),
    "Traits": re.compile(r"^\s*trait\s+\w+", _FLAGS),
    "Type Declarations": re.compile(r"declare\(strict_types=1\)"),
    "Attributes": re.compile(r"^\s*#\[[A-Z]", _FLAGS),
    "Eloquent Models": re.compile(r"\bextends\s+Model\b"),
}


def extract_php(content: str) -> ExtractionResult:
    result = ExtractionResult(
        variables=[v for v in _names(_PHP_VARIABLE, content) if v != "this"],
        functions=_names(_PHP_FUNCTION, content),
        classes=_names(_PHP_CLASS, content),
    )
    result.imports.extend(ImportReference(s, EdgeKind.REQUIRE) for s in _names(_PHP_INCLUDE, content))
    _detect_idioms(content, _PHP_IDIOMS, result)
    return result


EXTRACTORS: Dict[CodeLanguage, Extractor] = {
    CodeLanguage.PYTHON: extract_python,
    CodeLanguage.JAVASCRIPT: extract_javascript,
    CodeLanguage.TYPESCRIPT: extract_typescript,
    CodeLanguage.VUE: extract_single_file_component,
    CodeLanguage.SVELTE: extract_single_file_component,
    CodeLanguage.GO: extract_go,
    CodeLanguage.JAVA: extract_java,
    CodeLanguage.KOTLIN: extract_kotlin,
    CodeLanguage.CSHARP: extract_csharp,
    CodeLanguage.RUBY: extract_ruby,
    CodeLanguage.RUST: extract_rust,
    CodeLanguage.C: extract_c,
    CodeLanguage.CPP: extract_cpp,
    CodeLanguage.PHP: extract_php,
}


def get_extractor(language: CodeLanguage) -> Optional[Extractor]:
    """Extractor for a language, or None when the language is not supported."""
    return EXTRACTORS.get(language)


def extract(language: CodeLanguage, content: str) -> ExtractionResult:
    """
    Run the extractor for a language.

    Returns an empty result for unsupported languages.

    Examples:
        >>> extract(CodeLanguage.PYTHON, "import os\\nclass UserService: pass").classes
        ['UserService']
    """
    extractor = get_extractor(language)
    if extractor is None:
        return ExtractionResult()
    return extractor(content)
