"""
Naming utilities shared by the emitters and the transpiler backends.
"""

import re

# Words are runs of capitals (acronyms), capitalized/lowercase words, or digits
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def split_words(text: str) -> list[str]:
    """Split text into words on separators and camelCase boundaries.

    Examples:
        "My Schema" -> ["My", "Schema"]
        "fooBar_baz" -> ["foo", "Bar", "baz"]
        "XMLHttp2" -> ["XML", "Http", "2"]
    """
    return _WORD_PATTERN.findall(text or "")


def camel_case(text: str) -> str:
    """Convert text to camelCase ("My Schema" -> "mySchema")."""
    words = [w.lower() for w in split_words(text)]
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def snake_case(text: str) -> str:
    """Convert text to snake_case ("Foo Bar" -> "foo_bar")."""
    return "_".join(w.lower() for w in split_words(text))


def pascal_case(text: str) -> str:
    """Convert text to PascalCase ("foo_bar" -> "FooBar")."""
    return "".join(w.capitalize() for w in split_words(text))


def upper_snake_case(text: str) -> str:
    """Convert text to UPPER_SNAKE_CASE ("fooBar" -> "FOO_BAR")."""
    return snake_case(text).upper()


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def escape_identifier(name: str, reserved: set[str] | frozenset[str], fallback: str = "value") -> str:
    """Make `name` a usable identifier for a language.

    Empty names become `fallback`, names starting with a digit or colliding
    with a reserved word are prefixed with an underscore.
    """
    if not name:
        return fallback
    if name[0].isdigit() or name in reserved:
        return f"_{name}"
    return name


def type_identifier(text: str) -> str:
    """PascalCase type name valid in every target language.

    Examples:
        "Foo Bar" -> "FooBar"
        "3D Shape" -> "Type3DShape"
        "none" -> "NoneType"
    """
    name = pascal_case(text)
    if not name:
        return ""
    if name[0].isdigit():
        return f"Type{name}"
    if name in RESERVED_TYPE_NAMES:
        return f"{name}Type"
    return name


# PascalCase keywords, and names the generated code imports or uses unqualified
RESERVED_TYPE_NAMES = frozenset(
    {
        "None",
        "True",
        "False",
        "Self",
        "Any",
        "Dict",
        "List",
        "Union",
        "TypedDict",
        "NotRequired",
        "Enum",
        "Option",
        "Box",
        "Vec",
        "String",
        "Serialize",
        "Deserialize",
    }
)

TS_RESERVED = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "let",
        "static",
        "yield",
        "await",
    }
)

GO_RESERVED = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

RUST_RESERVED = frozenset(
    {
        "as",
        "async",
        "await",
        "break",
        "const",
        "continue",
        "crate",
        "dyn",
        "else",
        "enum",
        "extern",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "move",
        "mut",
        "pub",
        "ref",
        "return",
        "static",
        "struct",
        "trait",
        "true",
        "type",
        "unsafe",
        "use",
        "where",
        "while",
    }
)
