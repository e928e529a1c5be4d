"""
Core of the model reflector.

This package provides the ModelReflector, which reflects relations of Django
models, resolves related instances with memoization and discovers model
classes on disk.
"""

from .discovery import build_structure_information, discover_models
from .reflector import ModelReflector
from .types import ModelStructure, RelationDescriptor

__all__ = [
    "ModelReflector",
    "ModelStructure",
    "RelationDescriptor",
    "build_structure_information",
    "discover_models",
]
