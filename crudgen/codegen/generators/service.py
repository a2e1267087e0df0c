"""
Service generator: the business-logic layer of a model.
"""

from typing import List

from ..builders import ServiceDataBuilder, infer_scope
from ..core.generator import FileGenerator, RenderedFile
from ..core.naming import to_snake_case
from ..core.schema import ComponentType, GenerateRequest

SERVICE_TEMPLATE = "service.go.j2"


class ServiceGenerator(FileGenerator):
    """Renders ``internal/{scope}/service/{snake}.go``."""

    component = ComponentType.SERVICE

    def output_paths(self, request: GenerateRequest) -> List[str]:
        scope = infer_scope(request.package_path)
        return [f"internal/{scope}/service/{to_snake_case(request.model_name)}.go"]

    def render_files(self, request: GenerateRequest) -> List[RenderedFile]:
        context = ServiceDataBuilder(self.config, self.type_mapper).build_context(request)
        return [
            RenderedFile(
                self.output_paths(request)[0],
                self.render_template(SERVICE_TEMPLATE, context),
            )
        ]
