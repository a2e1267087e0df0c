"""
Frontend generators: API client, list page, edit dialog and route entries.

Their output is returned as snippets. API, page and form snippets carry a
whole new file as content; route snippets splice into the router files.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..builders import FieldRenderData
from ..core.schema import NEW_FILE_POINT, CodeSnippet, ComponentType, GenerateRequest
from .snippets import TemplateSnippetGenerator

API_DIR = "web/src/api"
VIEWS_DIR = "web/src/views"
ASYNC_ROUTES_FILE = "web/src/router/routes/asyncRoutes.ts"
ROUTES_ALIAS_FILE = "web/src/router/routesAlias.ts"

DEFAULT_ICON = "请修改图标"

_TEXTAREA_HINTS = ("description", "remark", "content")
_LENGTH_RULE = re.compile(r"\b(min|max)=(\d+)")


@dataclass
class FormFieldSpec:
    """One form widget of the edit dialog."""

    prop: str
    label: str
    widget: str  # text, password, email, textarea, select, number, switch, date, datetime
    component: str
    placeholder: str
    required: bool = False
    col_span: int = 12
    options: List[Dict[str, Any]] = field(default_factory=list)
    rules: List[str] = field(default_factory=list)


def _length_bounds(validate: str) -> Dict[str, int]:
    return {key: int(value) for key, value in _LENGTH_RULE.findall(validate or "")}


def build_form_field(f: FieldRenderData) -> FormFieldSpec:
    """
    Choose the widget and validation rules for a field.

    Args:
        f: Field render record

    Returns:
        Form widget description
    """
    lowered = f.source_name.lower()
    label = f.label
    spec = FormFieldSpec(
        prop=f.json_tag,
        label=label,
        widget="text",
        component="el-input",
        placeholder=f"请输入{label}",
        required="required" in (f.validate or ""),
    )

    if f.is_string:
        if "password" in lowered:
            spec.widget = "password"
        elif "email" in lowered:
            spec.widget = "email"
        elif any(hint in lowered for hint in _TEXTAREA_HINTS):
            spec.widget = "textarea"
            spec.col_span = 24
    elif f.is_status and f.is_integer:
        spec.widget = "select"
        spec.component = "el-select"
        spec.placeholder = f"请选择{label}"
        spec.options = [{"label": "启用", "value": 1}, {"label": "禁用", "value": 0}]
    elif f.is_numeric:
        spec.widget = "number"
        spec.component = "el-input-number"
    elif f.is_bool:
        spec.widget = "switch"
        spec.component = "el-switch"
        spec.col_span = 24
    elif f.is_time:
        spec.widget = "date" if "date" in lowered else "datetime"
        spec.component = "el-date-picker"
        spec.placeholder = f"请选择{label}"

    if spec.required:
        trigger = "change" if spec.component in ("el-select", "el-date-picker") else "blur"
        spec.rules.append(f"{{ required: true, message: '{spec.placeholder}', trigger: '{trigger}' }}")
    if "email" in (f.validate or "") or spec.widget == "email":
        spec.rules.append("{ type: 'email', message: '请输入正确的邮箱地址', trigger: 'blur' }")

    bounds = _length_bounds(f.validate)
    if bounds and f.is_string:
        parts = [f"{key}: {value}" for key, value in sorted(bounds.items(), reverse=True)]
        lo, hi = bounds.get("min"), bounds.get("max")
        if lo is not None and hi is not None:
            message = f"长度在 {lo} 到 {hi} 个字符"
        elif lo is not None:
            message = f"长度不能少于 {lo} 个字符"
        else:
            message = f"长度不能超过 {hi} 个字符"
        spec.rules.append(f"{{ {', '.join(parts)}, message: '{message}', trigger: 'blur' }}")

    return spec


class FrontendAPIGenerator(TemplateSnippetGenerator):
    """TypeScript API client module for the model's REST endpoints."""

    component = ComponentType.FRONTEND_API

    def api_file(self, ctx: Dict[str, Any]) -> str:
        return f"{API_DIR}/{ctx['model_name_lower']}Api.ts"

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        target = self.api_file(ctx)
        return [
            CodeSnippet(
                id=f"frontend_api_{ctx['model_name_snake']}",
                content=self.render_snippet("frontend/api.ts.j2", ctx),
                target_file=target,
                insert_point=NEW_FILE_POINT,
                description=f"Create {target} with the {ctx['api_base_path']} client",
                priority=1,
                category="frontend_api",
            )
        ]


class FrontendPageGenerator(TemplateSnippetGenerator):
    """Vue list page with search bar and data table."""

    component = ComponentType.FRONTEND_PAGE

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        target = f"{VIEWS_DIR}/{ctx['model_name_kebab']}/index.vue"
        return [
            CodeSnippet(
                id=f"frontend_page_{ctx['model_name_snake']}",
                content=self.render_snippet("frontend/page.vue.j2", ctx),
                target_file=target,
                insert_point=NEW_FILE_POINT,
                description=f"Create the {ctx['display_name']} list page",
                priority=2,
                category="frontend_page",
            )
        ]


class FrontendFormGenerator(TemplateSnippetGenerator):
    """Vue create/edit dialog used by the list page."""

    component = ComponentType.FRONTEND_FORM

    def build_context(self, request: GenerateRequest) -> Dict[str, Any]:
        ctx = super().build_context(request)
        ctx["form_fields"] = [build_form_field(f) for f in ctx["fields"]]
        return ctx

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        kebab = ctx["model_name_kebab"]
        target = f"{VIEWS_DIR}/{kebab}/modules/{kebab}-dialog.vue"
        return [
            CodeSnippet(
                id=f"frontend_form_{ctx['model_name_snake']}",
                content=self.render_snippet("frontend/form.vue.j2", ctx),
                target_file=target,
                insert_point=NEW_FILE_POINT,
                description=f"Create the {ctx['display_name']} edit dialog",
                priority=3,
                category="frontend_form",
            )
        ]


class FrontendRouteGenerator(TemplateSnippetGenerator):
    """Menu route config and its RoutesAlias entry."""

    component = ComponentType.FRONTEND_ROUTE

    def __init__(self, *args, icon: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.icon = icon or self.config.custom.get("frontend_icon", DEFAULT_ICON)

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = dict(self.build_context(request), icon=self.icon)
        snake = ctx["model_name_snake"]
        return [
            CodeSnippet(
                id=f"frontend_route_config_{snake}",
                content=self.render_snippet("snippets/frontend_route_config.ts.j2", ctx),
                target_file=ASYNC_ROUTES_FILE,
                insert_point=f"End of the asyncRoutes array ({ctx['display_name']})",
                insert_before="^]",
                description="Add the top-level menu route to asyncRoutes",
                priority=1,
                category="frontend_route_config",
            ),
            CodeSnippet(
                id=f"frontend_route_alias_{snake}",
                content=self.render_snippet("snippets/frontend_route_alias.ts.j2", ctx),
                target_file=ROUTES_ALIAS_FILE,
                insert_point="Inside the RoutesAlias enum",
                insert_after="export enum RoutesAlias {",
                description=f"Alias {ctx['model_name']} to {ctx['base_path']}",
                priority=2,
                category="frontend_route_alias",
            ),
        ]
