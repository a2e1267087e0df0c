"""
Naming utilities for safe code generation.

Handles case conversions, pluralization, identifier sanitization,
reserved-word conflicts and the human labels derived from field comments.
All functions here are pure and total on any string input.
"""

import re
from enum import Enum
from typing import Callable, Dict, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    LOWER_CAMEL = "lower_camel"  # UserName -> userName, first rune only
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEGMENT_SPLIT = re.compile(r"[_\- ]")

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "man": "men",
    "woman": "women",
}

_VOWELS = set("aeiou")

# Bracket pairs stripped from comments before they become UI labels
_BRACKET_PAIRS = (
    ("(", ")"),
    ("（", "）"),
    ("[", "]"),
    ("【", "】"),
    ("{", "}"),
    ("｛", "｝"),
)
_TRAILING_PUNCTUATION = "，,；;：:"
_LABEL_SUFFIXES = ("字段", "信息")


def to_snake_case(name: str) -> str:
    """
    Convert to snake_case, keeping acronym runs together.

    ``XMLHttpRequest`` becomes ``xml_http_request``: a run of capitals
    followed by a lowercase letter is read as "acronym + new word".
    """
    s1 = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    s2 = _WORD_BOUNDARY.sub(r"\1_\2", s1)
    return s2.lower()


def _segments(name: str):
    return [part for part in _SEGMENT_SPLIT.split(name) if part]


def to_camel_case(name: str) -> str:
    """Convert to camelCase by splitting on ``_``, ``-`` and spaces."""
    parts = _segments(name)
    if not parts:
        return ""
    head = parts[0].lower()
    return head + "".join(part[0].upper() + part[1:].lower() for part in parts[1:])


def to_lower_camel_case(name: str) -> str:
    """Lower-case only the first character (``UserProfile`` -> ``userProfile``)."""
    if not name:
        return name
    return name[0].lower() + name[1:]


def is_pascal_case(name: str) -> bool:
    """Check whether a name already is PascalCase (capital first, alphanumerics only)."""
    if not name or not ("A" <= name[0] <= "Z"):
        return False
    return all(ch.isascii() and ch.isalnum() for ch in name)


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase; already-PascalCase input is returned unchanged."""
    if is_pascal_case(name):
        return name
    parts = _segments(name)
    return "".join(part[0].upper() + part[1:].lower() for part in parts)


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case (snake_case with hyphens)."""
    return to_snake_case(name).replace("_", "-")


def to_plural(word: str) -> str:
    """
    Pluralize an English noun.

    Irregular forms are looked up first; otherwise suffix rules apply in
    order: consonant + y, sibilants (s/sh/ch/x/z), f, fe, then plain ``s``.

    Args:
        word: Singular noun (lower-cased before processing)

    Returns:
        Plural form, or empty string for empty input
    """
    if not word:
        return ""

    word = word.lower()
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]

    if len(word) > 1 and word.endswith("y") and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    if word.endswith("fe"):
        return word[:-2] + "ves"
    if word.endswith("f"):
        return word[:-1] + "ves"
    return word + "s"


def _strip_brackets(text: str, open_bracket: str, close_bracket: str) -> str:
    """
    Remove every bracketed segment of one bracket kind, nested ones included.

    ``"备注(未闭合"`` becomes ``"备注"``.
    """
    result = []
    depth = 0
    cut = 0
    for ch in text:
        if ch == open_bracket:
            if not depth:
                cut = len(result)
            depth += 1
        elif ch == close_bracket and depth:
            depth -= 1
        elif not depth:
            result.append(ch)
    # An opening bracket that is never closed swallows the rest of the text
    if depth:
        return "".join(result[:cut])
    return "".join(result)


def clean_comment(comment: str) -> str:
    """
    Strip bracketed annotations and trailing punctuation from a comment.

    ``"状态（1启用，0禁用）"`` becomes ``"状态"``.
    """
    if not comment:
        return ""
    cleaned = comment
    for open_bracket, close_bracket in _BRACKET_PAIRS:
        cleaned = _strip_brackets(cleaned, open_bracket, close_bracket)
    return cleaned.strip().rstrip(_TRAILING_PUNCTUATION).strip()


def display_label(comment: str, fallback: str = "") -> str:
    """
    Derive a short UI label from a field comment.

    Args:
        comment: Free-text field comment
        fallback: Label to use when the comment yields nothing

    Returns:
        Text before the first comma, or the comment without its
        generic suffixes, or the fallback
    """
    cleaned = clean_comment(comment)
    if not cleaned:
        return fallback

    for sep in ("，", ","):
        if sep in cleaned:
            head = cleaned.split(sep, 1)[0].strip()
            return head or fallback

    for suffix in _LABEL_SUFFIXES:
        if cleaned.endswith(suffix) and len(cleaned) > len(suffix):
            cleaned = cleaned[: -len(suffix)]
            break
    return cleaned.strip() or fallback


_CASE_CONVERTERS: Dict[NamingCase, Callable[[str], str]] = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.LOWER_CAMEL: to_lower_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
    NamingCase.SCREAMING_SNAKE: lambda name: to_snake_case(name).upper(),
}


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert a name to the requested case style."""
    return _CASE_CONVERTERS[target_case](name)


class NameSanitizer:
    """Turns arbitrary text into legal, non-reserved identifiers."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        conflict_suffix: str = "Field",
        fallback_name: str = "Field",
        digit_prefix: str = "F",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that cannot be used as identifiers
            conflict_suffix: Appended when a name collides with a reserved word
            fallback_name: Used when nothing legal survives cleanup
            digit_prefix: Prepended when a name would start with a non-letter
        """
        self.reserved_words = reserved_words or set()
        self.conflict_suffix = conflict_suffix
        self.fallback_name = fallback_name
        self.digit_prefix = digit_prefix

    def is_reserved(self, name: str) -> bool:
        """Check a name against the reserved word set (case-sensitive)."""
        return name in self.reserved_words

    def sanitize_name(self, name: str, exported: bool = False) -> str:
        """
        Sanitize a name for safe use as an identifier.

        The result is stable: sanitizing it again returns it unchanged.

        Args:
            name: Original name to sanitize
            exported: Upper-case the first character of the result

        Returns:
            Sanitized identifier
        """
        cleaned = self._resolve_conflicts(self._clean_basic(name))

        if exported:
            # upper() may yield combining marks, so clean the result again
            cleaned = self._resolve_conflicts(self._clean_basic(cleaned[0].upper() + cleaned[1:]))

        return cleaned

    def _clean_basic(self, name: str) -> str:
        """Drop illegal characters and fix an illegal first character."""
        if not name:
            return self.fallback_name

        chars = []
        first = name[0]
        if first.isalpha() or first == "_":
            chars.append(first)
        else:
            chars.append(self.digit_prefix)
            if first.isdecimal():
                chars.append(first)

        chars.extend(ch for ch in name[1:] if ch.isalpha() or ch.isdecimal() or ch == "_")

        return "".join(chars) or self.fallback_name

    def _resolve_conflicts(self, name: str) -> str:
        """Append the conflict suffix to reserved words."""
        if self.is_reserved(name):
            return f"{name}{self.conflict_suffix}"
        return name
