"""
Go-specific type system for code generation.

Maps logical field types to Go types and reports the imports they drag in.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional


class StatusFieldKind(Enum):
    """How a status-like field is represented in Go."""

    NONE = "none"
    BOOL = "bool"
    INT = "int"
    BOOL_POINTER = "bool_pointer"
    INT_POINTER = "int_pointer"


INTEGER_TYPES = frozenset(
    {"int", "int8", "int16", "int32", "int64", "uint", "uint8", "uint16", "uint32", "uint64"}
)
FLOAT_TYPES = frozenset({"float32", "float64"})

STATUS_FIELD_NAMES = frozenset({"status", "state", "enabled", "active"})


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a mapped Go type.

    Carries the rendered type name together with the imports it needs.
    """

    name: str  # The Go type name (e.g., "string", "*time.Time")
    base_name: str = field(default="")  # Name without pointer prefix
    is_pointer: bool = field(default=False)
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        """Derive pointer flag and base name from the type name."""
        if self.name.startswith("*"):
            object.__setattr__(self, "is_pointer", True)
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name.lstrip("*"))

    def as_pointer(self) -> "GoType":
        """Return a pointer version of this type."""
        if self.is_pointer:
            return self
        return GoType(
            name=f"*{self.name}",
            base_name=self.base_name,
            is_pointer=True,
            imports_needed=self.imports_needed,
        )

    @property
    def is_temporal(self) -> bool:
        return "time.Time" in self.name

    @property
    def is_integer(self) -> bool:
        return self.base_name in INTEGER_TYPES

    @property
    def is_float(self) -> bool:
        return self.base_name in FLOAT_TYPES

    @property
    def is_bool(self) -> bool:
        return self.base_name == "bool"

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_float


@dataclass
class GoTypeConfig:
    """Configuration for logical-type mapping."""

    time_type: str = "*time.Time"
    time_import: str = "time"
    decimal_type: str = "float64"
    unknown_type: str = "string"
    type_overrides: Dict[str, str] = field(default_factory=dict)


class GoTypeMapper:
    """Maps logical field type names to Go types."""

    def __init__(self, config: Optional[GoTypeConfig] = None):
        """
        Initialize type mapper.

        Args:
            config: Mapping configuration, defaults when omitted
        """
        self.config = config or GoTypeConfig()
        self._type_map = self._build_type_map()

    def _build_type_map(self) -> Dict[str, str]:
        """Build the case-insensitive logical type table."""
        type_map = {name: name for name in ("string", "bool")}
        type_map.update({name: name for name in ("int", "int32", "int64")})
        type_map.update({name: name for name in ("uint", "uint32", "uint64")})
        type_map.update({name: name for name in FLOAT_TYPES})

        for temporal in ("time", "date", "datetime", "timestamp"):
            type_map[temporal] = self.config.time_type
        for textual in ("text", "json"):
            type_map[textual] = "string"
        for decimal in ("decimal", "decimal.decimal"):
            type_map[decimal] = self.config.decimal_type

        type_map.update({k.lower(): v for k, v in self.config.type_overrides.items()})
        return type_map

    def map_logical_type(self, logical_type: str) -> GoType:
        """
        Map a logical type name to a Go type.

        Known names are looked up case-insensitively; anything already
        shaped like a Go type (pointer or qualified name) passes through;
        everything else falls back to the unknown type.

        Args:
            logical_type: User-facing type name, e.g. "decimal"

        Returns:
            GoType with the imports the mapped type requires
        """
        key = (logical_type or "").strip()
        mapped = self._type_map.get(key.lower())
        if mapped is None:
            if "*" in key or "." in key:
                mapped = key
            else:
                mapped = self.config.unknown_type

        imports = set()
        if "time.Time" in mapped:
            imports.add(self.config.time_import)

        return GoType(name=mapped, imports_needed=frozenset(imports))

    def map_type_name(self, logical_type: str) -> str:
        """Return just the Go type name for a logical type."""
        return self.map_logical_type(logical_type).name

    def needs_time_import(self, logical_types: Iterable[str]) -> bool:
        """Check whether any of the logical types maps to a temporal Go type."""
        return any(self.map_logical_type(t).is_temporal for t in logical_types)

    def status_field_kind(self, field_name: str, logical_type: str) -> StatusFieldKind:
        """
        Classify a field as a status flag.

        A status field has a conventional name (status/state/enabled/active,
        any case) and an integer or bool Go type.
        """
        if field_name.lower() not in STATUS_FIELD_NAMES:
            return StatusFieldKind.NONE

        go_type = self.map_logical_type(logical_type)
        if go_type.is_bool:
            return StatusFieldKind.BOOL_POINTER if go_type.is_pointer else StatusFieldKind.BOOL
        if go_type.is_integer:
            return StatusFieldKind.INT_POINTER if go_type.is_pointer else StatusFieldKind.INT
        return StatusFieldKind.NONE

    def is_status_field(self, field_name: str, logical_type: str) -> bool:
        """Check whether a field is a status flag."""
        return self.status_field_kind(field_name, logical_type) is not StatusFieldKind.NONE


_default_mapper: Optional[GoTypeMapper] = None


def get_default_type_mapper() -> GoTypeMapper:
    """Get the shared type mapper with default configuration."""
    global _default_mapper
    if _default_mapper is None:
        _default_mapper = GoTypeMapper()
    return _default_mapper
