"""
TypeScript support for generated frontend artifacts.
"""

from .types import map_go_type

__all__ = ["map_go_type"]
