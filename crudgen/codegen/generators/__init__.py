"""
Concrete component generators.
"""

from .frontend import (
    FrontendAPIGenerator,
    FrontendFormGenerator,
    FrontendPageGenerator,
    FrontendRouteGenerator,
)
from .handler import HandlerGenerator
from .model import ModelGenerator
from .repository import RepositoryGenerator
from .service import ServiceGenerator
from .snippets import (
    MigrationSnippetGenerator,
    PermissionSnippetGenerator,
    RouteSnippetGenerator,
    WireSnippetGenerator,
)

__all__ = [
    "ModelGenerator",
    "RepositoryGenerator",
    "ServiceGenerator",
    "HandlerGenerator",
    "RouteSnippetGenerator",
    "WireSnippetGenerator",
    "MigrationSnippetGenerator",
    "PermissionSnippetGenerator",
    "FrontendAPIGenerator",
    "FrontendPageGenerator",
    "FrontendFormGenerator",
    "FrontendRouteGenerator",
]
