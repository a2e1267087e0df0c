"""
Code generation orchestrator.

Validates a request once, dispatches it to the registered generator(s)
and records the written files in the generation history. Expected
failures always come back as a structured response.
"""

from typing import List, Optional

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.generator import ComponentGenerator, UnsupportedComponentError
from .core.history import HistoryError, HistoryManager, create_history_manager
from .core.schema import (
    FILE_COMPONENTS,
    SNIPPET_COMPONENTS,
    ComponentType,
    GenerateHistory,
    GenerateRequest,
    GenerateResponse,
)
from .core.templates import TemplateEngine, create_template_engine
from .core.validator import Validator, format_validation_errors
from .registry import GeneratorRegistry, RegistryError, get_registry

logger = get_logger(__name__)


class CodeGenerator:
    """Entry point for every generation request."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        history_manager: Optional[HistoryManager] = None,
        registry: Optional[GeneratorRegistry] = None,
        validator: Optional[Validator] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Run configuration, loaded defaults when omitted
            history_manager: History backend, the configured JSON file when omitted
            registry: Component to generator mapping, the global one when omitted
            validator: Request validator
            template_engine: Engine shared by all generators of this orchestrator
        """
        self.config = config or load_config()
        self.history = history_manager or create_history_manager(self.config)
        self.registry = registry or get_registry()
        self.validator = validator or Validator()
        if template_engine is None:
            template_engine = create_template_engine(self.config.templates_dir)
        self.template_engine = template_engine

    def generate(self, request: GenerateRequest) -> GenerateResponse:
        """
        Validate and run a generation request.

        Args:
            request: What to generate

        Returns:
            Structured result; ``errors`` names every independent failure
        """
        errors = self.validator.validate(request)
        if errors:
            logger.info("Rejected %s request with %d validation error(s)", request.model_name, len(errors))
            return GenerateResponse.failure(
                "Request validation failed", format_validation_errors(errors)
            )

        if request.component_type is ComponentType.ALL:
            return self._generate_all(request)
        return self._generate_single(request)

    def _generator_for(self, component: ComponentType, operation: str) -> ComponentGenerator:
        """
        Instantiate the generator of a component after a capability check.

        Raises:
            UnsupportedComponentError: If no generator can perform the operation
        """
        if not self.registry.supports(component, operation):
            raise UnsupportedComponentError(
                f"No generator registered that produces {operation} for component '{component.value}'"
            )
        try:
            return self.registry.create_generator(component, self.config, self.template_engine)
        except RegistryError as e:
            raise UnsupportedComponentError(str(e))

    def _generate_single(self, request: GenerateRequest) -> GenerateResponse:
        component = request.component_type
        operation = "files" if component.is_file_component else "snippets"

        try:
            generator = self._generator_for(component, operation)
        except UnsupportedComponentError as e:
            return GenerateResponse.failure(f"Cannot generate {component.value}", [str(e)])

        response = generator.generate(request)
        if response.success and response.generated_files:
            self._record_history(request, response, [component.value])
        return response

    def _generate_all(self, request: GenerateRequest) -> GenerateResponse:
        """
        Run every file stage in dependency order, then collect snippets.

        A failing stage never stops the stages after it.
        """
        files: List[str] = []
        errors: List[str] = []
        succeeded: List[str] = []
        failed: List[str] = []

        for component in FILE_COMPONENTS:
            try:
                generator = self._generator_for(component, "files")
            except UnsupportedComponentError as e:
                failed.append(component.value)
                errors.append(str(e))
                continue

            result = generator.generate(request)
            if result.success:
                succeeded.append(component.value)
                files.extend(result.generated_files)
            else:
                failed.append(component.value)
                errors.extend(result.errors or [result.message])

        snippets = []
        for component in SNIPPET_COMPONENTS:
            try:
                generator = self._generator_for(component, "snippets")
            except UnsupportedComponentError as e:
                failed.append(component.value)
                errors.append(str(e))
                continue

            result = generator.generate(request)
            if result.success:
                snippets.extend(result.code_snippets)
            else:
                failed.append(component.value)
                errors.extend(result.errors or [result.message])

        if failed:
            message = (
                f"Generated {len(succeeded)} of {len(FILE_COMPONENTS)} layers for "
                f"{request.model_name}; failed: {', '.join(failed)}"
            )
        else:
            message = f"Generated all layers for {request.model_name}"

        response = GenerateResponse(
            success=not failed,
            generated_files=files,
            code_snippets=snippets,
            message=message,
            errors=errors,
        )
        if files:
            self._record_history(request, response, succeeded)
        return response

    def _record_history(self, request: GenerateRequest, response: GenerateResponse, components: List[str]):
        """Record written files; a history failure is reported, not raised."""
        try:
            self.history.add(
                request,
                response.generated_files,
                components=components,
                generated_by=self.config.generated_by,
            )
            response.history_updated = True
        except HistoryError as e:
            logger.error("Failed to record history for %s: %s", request.model_name, e)
            response.history_updated = False
            response.errors.append(f"history: {e}")

    # History queries

    def get_history(self) -> List[GenerateHistory]:
        return self.history.get_all()

    def get_history_by_module(self, module_name: str) -> Optional[GenerateHistory]:
        return self.history.get_by_module(module_name)

    def delete_history(self, module_name: str) -> List[str]:
        """Delete a module's generated files and its history record."""
        return self.history.delete_by_module(module_name)

    def clear_history(self) -> List[str]:
        return self.history.clear()
