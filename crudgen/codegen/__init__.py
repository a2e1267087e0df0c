"""
crudgen code generation module.

Generates backend layers and frontend artifacts from a model description.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.schema import ComponentType, FieldDefinition, GenerateRequest, GenerateResponse
from .orchestrator import CodeGenerator
from .registry import GeneratorRegistry, create_generator, get_registry


def generate(request, config=None, history_manager=None) -> GenerateResponse:
    """
    Run one generation request.

    Args:
        request: GenerateRequest or its JSON dict form
        config: GeneratorConfig or dict of overrides
        history_manager: History backend, the configured JSON file when omitted

    Returns:
        GenerateResponse
    """
    if isinstance(request, dict):
        request = GenerateRequest.from_dict(request)
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)
    return CodeGenerator(config, history_manager=history_manager).generate(request)


__all__ = [
    "CodeGenerator",
    "ComponentType",
    "ConfigManager",
    "FieldDefinition",
    "GenerateRequest",
    "GenerateResponse",
    "GeneratorConfig",
    "GeneratorRegistry",
    "create_generator",
    "generate",
    "get_registry",
    "load_config",
]
