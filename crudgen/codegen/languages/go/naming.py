"""
Go-specific naming rules: keywords, identifier legality and sanitization.
"""

from ...core.naming import NameSanitizer

# Go reserved keywords
GO_RESERVED_WORDS = {
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


def create_go_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Go identifiers."""
    return NameSanitizer(GO_RESERVED_WORDS, conflict_suffix="Field")


_sanitizer = create_go_sanitizer()


def is_valid_identifier(name: str) -> bool:
    """
    Check whether a name is a legal Go identifier.

    A letter or underscore first, then letters, digits or underscores.
    """
    if not name:
        return False
    first = name[0]
    if not (first.isalpha() or first == "_"):
        return False
    return all(ch.isalpha() or ch.isdecimal() or ch == "_" for ch in name[1:])


def is_reserved_word(name: str) -> bool:
    """Check whether a name is a Go keyword."""
    return name in GO_RESERVED_WORDS


def sanitize_identifier(name: str) -> str:
    """
    Turn arbitrary text into an exported, legal, non-keyword Go identifier.

    Args:
        name: Field or type name as supplied by the user

    Returns:
        Sanitized identifier; sanitizing it again returns it unchanged
    """
    return _sanitizer.sanitize_name(name, exported=True)
