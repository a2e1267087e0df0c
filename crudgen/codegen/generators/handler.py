"""
Handler generator: HTTP handler plus its request/response types file.
"""

from typing import List

from ..builders import HandlerDataBuilder
from ..core.generator import FileGenerator, RenderedFile
from ..core.naming import to_snake_case
from ..core.schema import ComponentType, GenerateRequest

HANDLER_TEMPLATE = "handler.go.j2"
HANDLER_TYPES_TEMPLATE = "handler_types.go.j2"


class HandlerGenerator(FileGenerator):
    """
    Renders two files for one component:

    - ``internal/admin/handler/{snake}.go``
    - ``internal/admin/types/{snake}_types.go``
    """

    component = ComponentType.HANDLER

    def output_paths(self, request: GenerateRequest) -> List[str]:
        snake = to_snake_case(request.model_name)
        return [
            f"internal/admin/handler/{snake}.go",
            f"internal/admin/types/{snake}_types.go",
        ]

    def render_files(self, request: GenerateRequest) -> List[RenderedFile]:
        context = HandlerDataBuilder(self.config, self.type_mapper).build_context(request)
        handler_path, types_path = self.output_paths(request)
        return [
            RenderedFile(handler_path, self.render_template(HANDLER_TEMPLATE, context)),
            RenderedFile(types_path, self.render_template(HANDLER_TYPES_TEMPLATE, context)),
        ]
