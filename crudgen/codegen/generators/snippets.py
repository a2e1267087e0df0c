"""
Backend snippet generators: routes, dependency wiring, migrations and
permissions.

These target files are hand-curated, so nothing here writes to disk.
Each snippet names its target file and the anchor that locates the
splice point; see ``core.anchors`` for how anchors resolve.
"""

from typing import Any, Dict, List

from ..builders import SnippetDataBuilder
from ..core.generator import SnippetGenerator
from ..core.schema import CodeSnippet, ComponentType, GenerateRequest

ROUTES_FILE = "internal/admin/routes/routes.go"
PROVIDER_FILE = "internal/admin/provider.go"
DATABASE_INIT_FILE = "internal/admin/initializer/database.go"
PERMISSIONS_FILE = "internal/admin/definitions/permissions.go"


class TemplateSnippetGenerator(SnippetGenerator):
    """Snippet generator whose fragments are rendered from templates."""

    def build_context(self, request: GenerateRequest) -> Dict[str, Any]:
        return SnippetDataBuilder(self.config, self.type_mapper).build_context(request)

    def render_snippet(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a fragment so it ends with exactly one newline."""
        return self.render_template(template_name, context).rstrip("\n") + "\n"


class RouteSnippetGenerator(TemplateSnippetGenerator):
    """Route group registration plus the Handlers struct field."""

    component = ComponentType.ROUTES

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        snake = ctx["model_name_snake"]
        return [
            CodeSnippet(
                id=f"route_group_{snake}",
                content=self.render_snippet("snippets/route_group.go.j2", ctx),
                target_file=ROUTES_FILE,
                insert_point="End of the protectedGroup block in RegisterRoutes",
                insert_before="\t}\n}",
                description=f"Register the {ctx['base_path']} CRUD routes",
                priority=1,
                category="route",
            ),
            CodeSnippet(
                id=f"route_handler_field_{snake}",
                content=self.render_snippet("snippets/route_handler_field.go.j2", ctx),
                target_file=ROUTES_FILE,
                insert_point="Inside the Handlers struct",
                insert_after="type Handlers struct {",
                description=f"Expose {ctx['handler_name']} to the route table",
                priority=2,
                category="route",
            ),
        ]


class WireSnippetGenerator(TemplateSnippetGenerator):
    """Provider set entries and ProvideHandlers plumbing for the new layers."""

    component = ComponentType.WIRE

    _LAYERS = (
        ("repository", "Repository", "// Repository层"),
        ("service", "Service", "// Service层"),
        ("handler", "Handler", "// Handler层"),
    )

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        snake = ctx["model_name_snake"]
        model = ctx["model_name"]

        snippets = []
        for priority, (layer, suffix, anchor) in enumerate(self._LAYERS, start=1):
            layer_ctx = dict(ctx, layer=layer, provider_name=f"{model}{suffix}")
            snippets.append(
                CodeSnippet(
                    id=f"wire_{layer}_{snake}",
                    content=self.render_snippet("snippets/wire_providers.go.j2", layer_ctx),
                    target_file=PROVIDER_FILE,
                    insert_point=f"{suffix} section of ProviderSet",
                    insert_after=anchor,
                    description=f"Provide {layer}.New{model}{suffix} to wire",
                    priority=priority,
                    category="provider",
                )
            )

        snippets.append(
            CodeSnippet(
                id=f"wire_handler_param_{snake}",
                content=self.render_snippet("snippets/wire_handler_param.go.j2", ctx),
                target_file=PROVIDER_FILE,
                insert_point="Last parameter of ProvideHandlers",
                insert_before=") *routes.Handlers {",
                description=f"Inject {ctx['handler_name']} into ProvideHandlers",
                priority=4,
                category="provider",
            )
        )
        snippets.append(
            CodeSnippet(
                id=f"wire_handler_assign_{snake}",
                content=self.render_snippet("snippets/wire_handler_assign.go.j2", ctx),
                target_file=PROVIDER_FILE,
                insert_point="routes.Handlers literal returned by ProvideHandlers",
                insert_after="return &routes.Handlers{",
                description=f"Set the {ctx['handler_name']} field of routes.Handlers",
                priority=5,
                category="provider",
            )
        )
        return snippets


class MigrationSnippetGenerator(TemplateSnippetGenerator):
    """AutoMigrate registration of the new model."""

    component = ComponentType.MIGRATION

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        return [
            CodeSnippet(
                id=f"migration_{ctx['model_name_snake']}",
                content=self.render_snippet("snippets/migration.go.j2", ctx),
                target_file=DATABASE_INIT_FILE,
                insert_point="modelList in AutoMigrateAdminModels",
                insert_after="modelList := []interface{}{",
                description=(
                    f"Migrate table {ctx['table_name']}; the file must import "
                    f"{ctx['go_module']}/internal/shared/models"
                ),
                priority=1,
                category="migration",
            )
        ]


class PermissionSnippetGenerator(TemplateSnippetGenerator):
    """Permission module entry with the standard CRUD actions."""

    component = ComponentType.PERMISSION

    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        ctx = self.build_context(request)
        prefix = ctx["permission_prefix"]
        return [
            CodeSnippet(
                id=f"permission_{prefix}",
                content=self.render_snippet("snippets/permission.go.j2", ctx),
                target_file=PERMISSIONS_FILE,
                insert_point="Module list returned by getModuleConfigs",
                insert_after="return []ModuleConfig{",
                description=(
                    f"Grants {prefix}:list, {prefix}:create, {prefix}:update and {prefix}:delete"
                ),
                priority=1,
                category="permission",
            )
        ]
