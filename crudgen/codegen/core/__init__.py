"""
Core code generation components.

Provides the request/response model, validation, naming, templates,
the generator base classes, anchors and history used by every component.
"""

from .anchors import AnchorNotFoundError, apply_snippet, find_insertion_offset
from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    ComponentGenerator,
    ConflictError,
    FileGenerator,
    FormatError,
    GenerationIOError,
    GeneratorError,
    RenderError,
    SnippetGenerator,
    UnsupportedComponentError,
)
from .history import (
    HistoryError,
    HistoryManager,
    HistoryStore,
    InMemoryHistoryStore,
    JSONHistoryStore,
    create_history_manager,
)
from .naming import NameSanitizer, NamingCase
from .schema import (
    CodeSnippet,
    ComponentType,
    FieldDefinition,
    GenerateHistory,
    GenerateOptions,
    GenerateRequest,
    GenerateResponse,
    HistoryFile,
    SchemaError,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .validator import ValidationError, Validator, format_validation_errors

__all__ = [
    # Request/response model
    "CodeSnippet",
    "ComponentType",
    "FieldDefinition",
    "GenerateHistory",
    "GenerateOptions",
    "GenerateRequest",
    "GenerateResponse",
    "HistoryFile",
    "SchemaError",
    # Validation
    "ValidationError",
    "Validator",
    "format_validation_errors",
    # Base generator interface and errors
    "ComponentGenerator",
    "FileGenerator",
    "SnippetGenerator",
    "GeneratorError",
    "ConflictError",
    "RenderError",
    "GenerationIOError",
    "FormatError",
    "UnsupportedComponentError",
    # Naming utilities
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Snippet anchors
    "AnchorNotFoundError",
    "apply_snippet",
    "find_insertion_offset",
    # History
    "HistoryError",
    "HistoryManager",
    "HistoryStore",
    "InMemoryHistoryStore",
    "JSONHistoryStore",
    "create_history_manager",
]
