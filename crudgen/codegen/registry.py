"""
Generator registry mapping component types to generator classes.

Provides registration and instantiation of component generators.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import ComponentGenerator
from .core.schema import ComponentType
from .core.templates import TemplateEngine


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


def _component_key(component: Union[ComponentType, str]) -> str:
    if isinstance(component, ComponentType):
        return component.value
    return str(component).strip().lower()


class GeneratorRegistry:
    """Registry for managing available component generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[ComponentGenerator]] = {}

    def register(
        self,
        component: Union[ComponentType, str],
        generator_class: Type[ComponentGenerator],
        replace: bool = False,
    ):
        """
        Register a generator for a component.

        Args:
            component: Component type the generator produces
            generator_class: Class implementing ComponentGenerator
            replace: Replace an existing registration instead of skipping it

        Raises:
            RegistryError: If the class is not a ComponentGenerator
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, ComponentGenerator)):
            raise RegistryError("Generator class must inherit from ComponentGenerator")

        key = _component_key(component)
        if key in self._generators and not replace:
            return
        self._generators[key] = generator_class

    def unregister(self, component: Union[ComponentType, str]):
        self._generators.pop(_component_key(component), None)

    def get_generator_class(self, component: Union[ComponentType, str]) -> Type[ComponentGenerator]:
        """
        Get generator class for a component.

        Raises:
            RegistryError: If nothing is registered for it
        """
        key = _component_key(component)
        if key in self._generators:
            return self._generators[key]

        raise RegistryError(
            f"No generator registered for component: {key}. "
            f"Available: {', '.join(self.list_components())}"
        )

    def create_generator(
        self,
        component: Union[ComponentType, str],
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        template_engine: Optional[TemplateEngine] = None,
    ) -> ComponentGenerator:
        """
        Create generator instance for a component.

        Args:
            component: Component type
            config: Configuration as GeneratorConfig, dict, or file path
            template_engine: Engine shared between generators of one run

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the component is unknown or the config invalid
        """
        generator_class = self.get_generator_class(component)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config, template_engine=template_engine)

    def list_components(self) -> List[str]:
        """Registered component names, sorted."""
        return sorted(self._generators.keys())

    def is_supported(self, component: Union[ComponentType, str]) -> bool:
        return _component_key(component) in self._generators

    def supports(self, component: Union[ComponentType, str], operation: str) -> bool:
        """
        Check whether the component's generator can perform an operation.

        Args:
            component: Component type
            operation: "files" or "snippets"
        """
        if not self.is_supported(component):
            return False
        generator_class = self.get_generator_class(component)
        if operation == "files":
            return generator_class.produces_files
        if operation == "snippets":
            return generator_class.produces_snippets
        return False


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register every built-in generator under its component type."""
    from .generators import (
        FrontendAPIGenerator,
        FrontendFormGenerator,
        FrontendPageGenerator,
        FrontendRouteGenerator,
        HandlerGenerator,
        MigrationSnippetGenerator,
        ModelGenerator,
        PermissionSnippetGenerator,
        RepositoryGenerator,
        RouteSnippetGenerator,
        ServiceGenerator,
        WireSnippetGenerator,
    )

    for generator_class in (
        ModelGenerator,
        RepositoryGenerator,
        ServiceGenerator,
        HandlerGenerator,
        RouteSnippetGenerator,
        WireSnippetGenerator,
        MigrationSnippetGenerator,
        PermissionSnippetGenerator,
        FrontendAPIGenerator,
        FrontendPageGenerator,
        FrontendFormGenerator,
        FrontendRouteGenerator,
    ):
        registry.register(generator_class.component, generator_class)


def create_generator(
    component: Union[ComponentType, str],
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> ComponentGenerator:
    """Get generator instance from the global registry."""
    return get_registry().create_generator(component, config)

