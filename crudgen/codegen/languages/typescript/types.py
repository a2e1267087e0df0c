"""
TypeScript type mapping for generated frontend code.

Frontend types are derived from the already-mapped Go type, so both
sides of the API agree on shapes.
"""

from ..go.types import GoType

TS_NUMBER = "number"
TS_BOOLEAN = "boolean"
TS_STRING = "string"
TS_ANY = "any"


def map_go_type(go_type: GoType) -> str:
    """
    Map a Go type to its TypeScript counterpart.

    Args:
        go_type: Mapped Go type of a field

    Returns:
        TypeScript type name
    """
    if go_type.is_numeric:
        return TS_NUMBER
    if go_type.is_bool:
        return TS_BOOLEAN
    if go_type.is_temporal or go_type.base_name == "string":
        return TS_STRING
    return TS_ANY
