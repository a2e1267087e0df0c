"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)

from ...logging_config import get_logger
from .naming import (
    NamingCase,
    convert_case,
    to_plural,
)

logger = get_logger(__name__)

# Templates shipped with the package
PACKAGED_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    def __init__(self, message: str, template_name: Optional[str] = None, missing: bool = False):
        super().__init__(message)
        self.template_name = template_name
        self.missing = missing


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None, include_packaged: bool = True):
        """
        Initialize template engine.

        Args:
            template_dir: Directory whose templates take precedence
            include_packaged: Fall back to the packaged templates
        """
        self.template_dir = Path(template_dir) if template_dir else None
        self.include_packaged = include_packaged
        self._memory = DictLoader({})
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        loaders = [self._memory]
        if self.template_dir and self.template_dir.exists():
            loaders.append(FileSystemLoader(str(self.template_dir)))
        elif self.template_dir:
            logger.warning("Template directory %s does not exist, ignoring", self.template_dir)
        if self.include_packaged:
            loaders.append(FileSystemLoader(str(PACKAGED_TEMPLATE_DIR)))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        # Add custom filters for code generation
        for case in NamingCase:
            self._env.filters[f"{case.value}_case"] = self._case_filter(case)
        self._env.filters["plural"] = to_plural

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False
        except Exception:
            # Exists but fails to compile; rendering reports the cause
            return True

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateError: If the template is missing, malformed or does
                not fit the context
        """
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound:
            raise TemplateError(
                f"Template not found: {template_name}", template_name=template_name, missing=True
            )
        except Exception as e:
            raise TemplateError(
                f"Failed to load template {template_name}: {e}", template_name=template_name
            )

        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}", template_name=template_name
            )

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template; it shadows file templates of the same name.

        Args:
            name: Template name
            content: Template content
        """
        self._memory.mapping[name] = content
        # Drop any compiled copy of a shadowed file template
        if self._env.cache is not None:
            self._env.cache.clear()

    # Naming filters available to every template

    @staticmethod
    def _case_filter(case: NamingCase):
        def _filter(value: Any) -> str:
            return convert_case(str(value), case)

        return _filter


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine layered over the packaged templates."""
    return TemplateEngine(template_dir)
