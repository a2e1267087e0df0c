"""
Request, response and history data model for code generation.

Every record round-trips through plain dicts using the snake_case JSON
keys of the wire format, so requests can come from files, the CLI or any
caller that speaks JSON.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .naming import to_plural, to_snake_case


class SchemaError(Exception):
    """Exception raised when a record cannot be built from its dict form."""

    pass


class ComponentType(Enum):
    """Generable components: file layers, snippet artifacts and the aggregate."""

    MODEL = "model"
    REPOSITORY = "repository"
    SERVICE = "service"
    HANDLER = "handler"
    ROUTES = "routes"
    WIRE = "wire"
    MIGRATION = "migration"
    PERMISSION = "permission"
    FRONTEND_API = "frontend_api"
    FRONTEND_PAGE = "frontend_page"
    FRONTEND_FORM = "frontend_form"
    FRONTEND_ROUTE = "frontend_route"
    ALL = "all"

    @classmethod
    def parse(cls, value: Union["ComponentType", str, None]) -> Union["ComponentType", str]:
        """
        Parse a component type, keeping unknown values as raw strings.

        Unknown values are not an error here; the validator reports them
        together with every other problem in the request.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        try:
            return cls(text.lower())
        except ValueError:
            return text

    @property
    def is_file_component(self) -> bool:
        return self in FILE_COMPONENTS


# Fixed dependency order used by the aggregate component
FILE_COMPONENTS = (
    ComponentType.MODEL,
    ComponentType.REPOSITORY,
    ComponentType.SERVICE,
    ComponentType.HANDLER,
)

SNIPPET_COMPONENTS = (
    ComponentType.ROUTES,
    ComponentType.WIRE,
    ComponentType.MIGRATION,
    ComponentType.PERMISSION,
    ComponentType.FRONTEND_API,
    ComponentType.FRONTEND_PAGE,
    ComponentType.FRONTEND_FORM,
    ComponentType.FRONTEND_ROUTE,
)


def _component_value(component: Union[ComponentType, str]) -> str:
    return component.value if isinstance(component, ComponentType) else str(component)


@dataclass
class FieldDefinition:
    """One user-declared model attribute."""

    name: str
    logical_type: str = ""
    gorm_tag: str = ""
    json_tag: str = ""
    validate: str = ""
    comment: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldDefinition":
        if not isinstance(data, dict):
            raise SchemaError(f"Field definition must be an object, got {type(data).__name__}")
        return cls(
            name=str(data.get("name") or ""),
            logical_type=str(data.get("type") or ""),
            gorm_tag=str(data.get("gorm_tag") or ""),
            json_tag=str(data.get("json_tag") or ""),
            validate=str(data.get("validate") or ""),
            comment=str(data.get("comment") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.logical_type,
            "gorm_tag": self.gorm_tag,
            "json_tag": self.json_tag,
            "validate": self.validate,
            "comment": self.comment,
        }


@dataclass
class GenerateOptions:
    """Per-request generation switches."""

    overwrite_existing: bool = False
    format_code: bool = False
    optimize_imports: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GenerateOptions":
        data = data or {}
        defaults = cls()
        return cls(
            overwrite_existing=bool(data.get("overwrite_existing", defaults.overwrite_existing)),
            format_code=bool(data.get("format_code", defaults.format_code)),
            optimize_imports=bool(data.get("optimize_imports", defaults.optimize_imports)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overwrite_existing": self.overwrite_existing,
            "format_code": self.format_code,
            "optimize_imports": self.optimize_imports,
        }


@dataclass
class GenerateRequest:
    """A request-scoped description of what to generate."""

    component_type: Union[ComponentType, str]
    model_name: str
    fields: List[FieldDefinition] = field(default_factory=list)
    table_name: str = ""
    package_path: str = ""
    model_name_cn: str = ""
    options: GenerateOptions = field(default_factory=GenerateOptions)

    def __post_init__(self):
        self.component_type = ComponentType.parse(self.component_type)

    @property
    def resolved_table_name(self) -> str:
        """Explicit table name, else the pluralized snake_case model name."""
        return self.table_name or to_plural(to_snake_case(self.model_name))

    @property
    def display_name(self) -> str:
        """Human name of the model used in labels and permission trees."""
        return self.model_name_cn or self.model_name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerateRequest":
        """
        Build a request from its JSON form.

        Raises:
            SchemaError: If the document shape is wrong (not its content;
                content problems are the validator's job)
        """
        if not isinstance(data, dict):
            raise SchemaError("Generate request must be a JSON object")

        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raise SchemaError("'fields' must be a list")

        return cls(
            component_type=data.get("component_type", ""),
            model_name=str(data.get("model_name") or ""),
            fields=[FieldDefinition.from_dict(item) for item in raw_fields],
            table_name=str(data.get("table_name") or ""),
            package_path=str(data.get("package_path") or ""),
            model_name_cn=str(data.get("model_name_cn") or ""),
            options=GenerateOptions.from_dict(data.get("options")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_type": _component_value(self.component_type),
            "model_name": self.model_name,
            "model_name_cn": self.model_name_cn,
            "fields": [f.to_dict() for f in self.fields],
            "table_name": self.table_name,
            "package_path": self.package_path,
            "options": self.options.to_dict(),
        }


# insert_point of snippets whose content is a complete new file
NEW_FILE_POINT = "New file"


@dataclass
class CodeSnippet:
    """A code fragment plus where it belongs in a hand-maintained file."""

    id: str
    content: str
    target_file: str
    insert_point: str = ""
    insert_after: str = ""
    insert_before: str = ""
    description: str = ""
    priority: int = 0  # lower is more urgent
    category: str = ""

    @property
    def creates_file(self) -> bool:
        """Whole-file snippet: the content is a new file, not a splice."""
        return self.insert_point == NEW_FILE_POINT and not (self.insert_after or self.insert_before)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodeSnippet":
        if not isinstance(data, dict):
            raise SchemaError("Code snippet must be a JSON object")
        return cls(
            id=str(data.get("id") or ""),
            content=str(data.get("content") or ""),
            target_file=str(data.get("target_file") or ""),
            insert_point=str(data.get("insert_point") or ""),
            insert_after=str(data.get("insert_after") or ""),
            insert_before=str(data.get("insert_before") or ""),
            description=str(data.get("description") or ""),
            priority=int(data.get("priority") or 0),
            category=str(data.get("category") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "target_file": self.target_file,
            "insert_point": self.insert_point,
            "insert_after": self.insert_after,
            "insert_before": self.insert_before,
            "description": self.description,
            "priority": self.priority,
            "category": self.category,
        }


@dataclass
class GenerateResponse:
    """Structured outcome of a generation call."""

    success: bool
    generated_files: List[str] = field(default_factory=list)
    code_snippets: List[CodeSnippet] = field(default_factory=list)
    message: str = ""
    history_updated: bool = False
    errors: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str, errors: Optional[List[str]] = None) -> "GenerateResponse":
        """Create a failed response."""
        return cls(success=False, message=message, errors=list(errors or []))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "success": self.success,
            "generated_files": list(self.generated_files),
            "message": self.message,
            "history_updated": self.history_updated,
        }
        if self.code_snippets:
            result["code_snippets"] = [s.to_dict() for s in self.code_snippets]
        if self.errors:
            result["errors"] = list(self.errors)
        return result


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now(timezone.utc)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise SchemaError(f"Invalid generated_at timestamp {value!r}: {e}")


@dataclass
class GenerateHistory:
    """Durable record of the files a module's last generation produced."""

    module_name: str
    model_name: str
    table_name: str = ""
    package_path: str = ""
    components: List[str] = field(default_factory=list)
    generated_files: List[str] = field(default_factory=list)
    generated_by: str = ""
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self):
        """Identity of the record inside a history file."""
        return (self.module_name, self.package_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerateHistory":
        if not isinstance(data, dict):
            raise SchemaError("History record must be a JSON object")
        return cls(
            module_name=str(data.get("module_name") or ""),
            model_name=str(data.get("model_name") or ""),
            table_name=str(data.get("table_name") or ""),
            package_path=str(data.get("package_path") or ""),
            components=[str(c) for c in data.get("components") or []],
            generated_files=[str(p) for p in data.get("generated_files") or []],
            generated_by=str(data.get("generated_by") or ""),
            generated_at=_parse_timestamp(data.get("generated_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module_name": self.module_name,
            "generated_at": self.generated_at.isoformat(),
            "components": list(self.components),
            "model_name": self.model_name,
            "table_name": self.table_name,
            "package_path": self.package_path,
            "generated_by": self.generated_by,
            "generated_files": list(self.generated_files),
        }


HISTORY_VERSION = "1.0.0"


@dataclass
class HistoryFile:
    """The whole persisted history document."""

    version: str = HISTORY_VERSION
    history: List[GenerateHistory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryFile":
        if not isinstance(data, dict):
            raise SchemaError("History file must contain a JSON object")
        records = data.get("history") or []
        if not isinstance(records, list):
            raise SchemaError("'history' must be a list")
        return cls(
            version=str(data.get("version") or HISTORY_VERSION),
            history=[GenerateHistory.from_dict(r) for r in records],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "history": [record.to_dict() for record in self.history],
        }
