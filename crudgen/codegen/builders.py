"""
Template data builders.

Each builder turns a validated request into the rendering context one
component needs: per-field render records plus the derived names
(request/response types, handler, service, routes) that sibling
artifacts must agree on.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .core.config import GeneratorConfig
from .core.naming import (
    display_label,
    to_camel_case,
    to_kebab_case,
    to_lower_camel_case,
    to_plural,
    to_snake_case,
)
from .core.schema import FieldDefinition, GenerateRequest
from .languages.go.naming import sanitize_identifier
from .languages.go.types import GoTypeMapper, StatusFieldKind, get_default_type_mapper
from .languages.typescript.types import map_go_type

# Standard library imports come first in generated import blocks
_STDLIB_IMPORTS = {"time", "context", "errors", "fmt", "strconv", "strings"}


@dataclass
class FieldRenderData:
    """One field as a template sees it."""

    name: str  # Go identifier
    source_name: str  # as declared in the request
    logical_type: str
    go_type: str
    ts_type: str
    json_tag: str
    gorm_tag: str
    validate: str
    comment: str
    label: str
    snake_name: str
    camel_name: str
    is_time: bool = False
    is_string: bool = False
    is_numeric: bool = False
    is_integer: bool = False
    is_bool: bool = False
    is_pointer: bool = False
    status_kind: StatusFieldKind = StatusFieldKind.NONE

    @property
    def is_status(self) -> bool:
        return self.status_kind is not StatusFieldKind.NONE

    @property
    def base_type(self) -> str:
        return self.go_type.lstrip("*")


@dataclass
class TemplateData:
    """Rendering context shared by all components of one model."""

    package_name: str
    go_module: str
    package_path: str
    scope: str
    model_name: str
    model_name_lower: str
    model_name_snake: str
    model_name_kebab: str
    model_name_camel: str
    display_name: str
    table_name: str
    fields: List[FieldRenderData]
    imports: List[str] = field(default_factory=list)
    has_time_field: bool = False
    has_validation: bool = False
    has_status_field: bool = False
    status_field: Optional[FieldRenderData] = None
    generated_at: str = ""

    # Handler and service names
    create_request_name: str = ""
    update_request_name: str = ""
    list_request_name: str = ""
    response_name: str = ""
    handler_name: str = ""
    service_name: str = ""
    service_interface: str = ""
    service_impl_name: str = ""
    repository_name: str = ""
    repository_impl_name: str = ""

    # Routes and permissions
    base_path: str = ""
    route_prefix: str = ""
    permission_prefix: str = ""
    api_base_path: str = ""

    def to_context(self) -> Dict[str, Any]:
        """Shallow dict view for template rendering."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def infer_scope(package_path: str) -> str:
    """
    Infer the internal layer directory from a package path.

    "admin" and "master" namespaces get their own directories; anything
    else is shared.
    """
    lowered = (package_path or "").lower()
    if "admin" in lowered:
        return "admin"
    if "master" in lowered:
        return "master"
    return "shared"


def order_imports(imports: List[str], optimize: bool) -> List[str]:
    """
    Deduplicate imports, keeping first-seen order.

    With ``optimize`` the standard library block comes first and each
    block is sorted.
    """
    unique = list(dict.fromkeys(i for i in imports if i))
    if not optimize:
        return unique
    stdlib = sorted(i for i in unique if i in _STDLIB_IMPORTS)
    others = sorted(i for i in unique if i not in _STDLIB_IMPORTS)
    return stdlib + others


class TemplateDataBuilder:
    """Builds the common rendering context; subclasses add layer specifics."""

    package_name = ""

    def __init__(self, config: GeneratorConfig, type_mapper: Optional[GoTypeMapper] = None):
        self.config = config
        self.type_mapper = type_mapper or get_default_type_mapper()

    def build_field(self, field_def: FieldDefinition) -> FieldRenderData:
        """Transform one declared field into its render record."""
        go_type = self.type_mapper.map_logical_type(field_def.logical_type)
        snake = to_snake_case(field_def.name)
        return FieldRenderData(
            name=sanitize_identifier(field_def.name),
            source_name=field_def.name,
            logical_type=field_def.logical_type,
            go_type=go_type.name,
            ts_type=map_go_type(go_type),
            json_tag=field_def.json_tag or snake,
            gorm_tag=field_def.gorm_tag,
            validate=field_def.validate,
            comment=field_def.comment,
            label=display_label(field_def.comment, field_def.name),
            snake_name=snake,
            camel_name=to_lower_camel_case(field_def.name),
            is_time=go_type.is_temporal,
            is_string=go_type.base_name == "string",
            is_numeric=go_type.is_numeric,
            is_integer=go_type.is_integer,
            is_bool=go_type.is_bool,
            is_pointer=go_type.is_pointer,
            status_kind=self.type_mapper.status_field_kind(field_def.name, field_def.logical_type),
        )

    def imports(self, request: GenerateRequest, data: TemplateData) -> List[str]:
        """Imports of the layer's primary file."""
        return []

    def build(self, request: GenerateRequest) -> TemplateData:
        """
        Build the rendering context for a validated request.

        Args:
            request: Request that passed validation

        Returns:
            TemplateData with every derived name filled in
        """
        model = request.model_name
        snake = to_snake_case(model)
        kebab = to_kebab_case(model)
        render_fields = [self.build_field(f) for f in request.fields]
        status_fields = [f for f in render_fields if f.is_status]

        data = TemplateData(
            package_name=self.package_name,
            go_module=self.config.go_module,
            package_path=request.package_path,
            scope=infer_scope(request.package_path),
            model_name=model,
            model_name_lower=to_lower_camel_case(model),
            model_name_snake=snake,
            model_name_kebab=kebab,
            model_name_camel=to_camel_case(snake),
            display_name=request.display_name,
            table_name=request.resolved_table_name,
            fields=render_fields,
            has_time_field=any(f.is_time for f in render_fields),
            has_validation=any(f.validate for f in render_fields),
            has_status_field=bool(status_fields),
            status_field=status_fields[0] if status_fields else None,
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            create_request_name=f"{model}CreateRequest",
            update_request_name=f"{model}UpdateRequest",
            list_request_name=f"{model}ListRequest",
            response_name=f"{model}Response",
            handler_name=f"{model}Handler",
            service_name=f"{model}Service",
            service_interface=f"{model}Service",
            service_impl_name=f"{model}ServiceImpl",
            repository_name=f"{model}Repository",
            repository_impl_name=f"{to_lower_camel_case(model)}Repository",
            base_path=f"/{kebab}",
            route_prefix=kebab,
            permission_prefix=snake,
            api_base_path=f"/admin-api/{kebab}",
        )
        data.imports = order_imports(self.imports(request, data), request.options.optimize_imports)
        return data

    def build_context(self, request: GenerateRequest) -> Dict[str, Any]:
        return self.build(request).to_context()


class ModelDataBuilder(TemplateDataBuilder):
    """Context for the ORM model file."""

    package_name = "models"

    def imports(self, request, data):
        imports = ["time"] if data.has_time_field else []
        imports.append(f"{data.go_module}/internal/shared/types")
        return imports


class RepositoryDataBuilder(TemplateDataBuilder):
    """Context for the data-access layer."""

    package_name = "repository"

    def imports(self, request, data):
        return [
            "context",
            "gorm.io/gorm",
            f"{data.go_module}/internal/shared/models",
            f"{data.go_module}/internal/shared/repository",
            f"{data.go_module}/internal/shared/types",
        ]


class ServiceDataBuilder(TemplateDataBuilder):
    """Context for the business-logic layer."""

    package_name = "service"

    def imports(self, request, data):
        return [
            "context",
            "errors",
            "gorm.io/gorm",
            f"{data.go_module}/internal/admin/types",
            f"{data.go_module}/internal/shared/models",
            f"{data.go_module}/internal/{data.scope}/repository",
        ]


class HandlerDataBuilder(TemplateDataBuilder):
    """Context for the HTTP handler and its request/response types file."""

    package_name = "handler"

    def imports(self, request, data):
        return [
            "strconv",
            "github.com/gin-gonic/gin",
            f"{data.go_module}/internal/admin/types",
            f"{data.go_module}/internal/{data.scope}/service",
            f"{data.go_module}/internal/shared/response",
        ]

    def types_imports(self, request: GenerateRequest, data: TemplateData) -> List[str]:
        """Imports of the companion types file; shared types are aliased by the template."""
        imports = ["time", f"{data.go_module}/internal/shared/models"]
        return order_imports(imports, request.options.optimize_imports)

    def build_context(self, request: GenerateRequest) -> Dict[str, Any]:
        data = self.build(request)
        context = data.to_context()
        context["types_imports"] = self.types_imports(request, data)
        return context


class SnippetDataBuilder(TemplateDataBuilder):
    """Context for snippets and frontend artifacts."""

    package_name = ""

    def build_context(self, request: GenerateRequest) -> Dict[str, Any]:
        data = self.build(request)
        context = data.to_context()
        context["table_columns"] = list(data.fields)
        context["search_fields"] = [f for f in data.fields if f.is_string or f.is_status]
        context["plural_snake"] = to_plural(data.model_name_snake)
        return context
