"""
Model generator: one ORM model file per request.
"""

from typing import List

from ...logging_config import get_logger
from ..builders import ModelDataBuilder
from ..core.generator import FileGenerator, RenderedFile, RenderError
from ..core.naming import to_snake_case
from ..core.schema import ComponentType, GenerateRequest

logger = get_logger(__name__)

MODEL_DIR = "internal/shared/models"
MODEL_TEMPLATE = "model.go.j2"
BUILTIN_MODEL_TEMPLATE = "builtin/model.go.j2"


class ModelGenerator(FileGenerator):
    """Renders ``internal/shared/models/{snake}.go``."""

    component = ComponentType.MODEL

    def output_paths(self, request: GenerateRequest) -> List[str]:
        return [f"{MODEL_DIR}/{to_snake_case(request.model_name)}.go"]

    def render_files(self, request: GenerateRequest) -> List[RenderedFile]:
        context = ModelDataBuilder(self.config, self.type_mapper).build_context(request)
        content = self.render_template(self._template_name(), context)
        return [RenderedFile(self.output_paths(request)[0], content)]

    def _template_name(self) -> str:
        """
        Pick the model template, falling back to the builtin name.

        Raises:
            RenderError: If neither template can be found
        """
        if self.template_engine.template_exists(MODEL_TEMPLATE):
            return MODEL_TEMPLATE

        logger.warning("Template %s not found, trying %s", MODEL_TEMPLATE, BUILTIN_MODEL_TEMPLATE)
        if self.template_engine.template_exists(BUILTIN_MODEL_TEMPLATE):
            return BUILTIN_MODEL_TEMPLATE

        raise RenderError(
            f"model: template '{MODEL_TEMPLATE}' is missing and the builtin fallback "
            f"'{BUILTIN_MODEL_TEMPLATE}' is not available"
        )
