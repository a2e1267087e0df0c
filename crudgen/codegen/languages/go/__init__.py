"""
Go language support for generated backend layers.
"""

from .naming import (
    GO_RESERVED_WORDS,
    create_go_sanitizer,
    is_reserved_word,
    is_valid_identifier,
    sanitize_identifier,
)
from .types import GoType, GoTypeConfig, GoTypeMapper, StatusFieldKind, get_default_type_mapper

__all__ = [
    "GO_RESERVED_WORDS",
    "create_go_sanitizer",
    "is_reserved_word",
    "is_valid_identifier",
    "sanitize_identifier",
    "GoType",
    "GoTypeConfig",
    "GoTypeMapper",
    "StatusFieldKind",
    "get_default_type_mapper",
]
