"""
Repository generator: the data-access layer of a model.
"""

from typing import List

from ..builders import RepositoryDataBuilder, infer_scope
from ..core.generator import FileGenerator, RenderedFile
from ..core.naming import to_snake_case
from ..core.schema import ComponentType, GenerateRequest

REPOSITORY_TEMPLATE = "repository.go.j2"


class RepositoryGenerator(FileGenerator):
    """Renders ``internal/{scope}/repository/{snake}.go``."""

    component = ComponentType.REPOSITORY

    def output_paths(self, request: GenerateRequest) -> List[str]:
        scope = infer_scope(request.package_path)
        return [f"internal/{scope}/repository/{to_snake_case(request.model_name)}.go"]

    def render_files(self, request: GenerateRequest) -> List[RenderedFile]:
        context = RepositoryDataBuilder(self.config, self.type_mapper).build_context(request)
        return [
            RenderedFile(
                self.output_paths(request)[0],
                self.render_template(REPOSITORY_TEMPLATE, context),
            )
        ]
