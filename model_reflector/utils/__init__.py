"""
Utility helpers shared by the model reflector.
"""

from .normalization import (
    camel_case,
    class_path,
    flatten,
    is_model_class,
    load_class,
    resolve_model_reference,
)

__all__ = [
    "camel_case",
    "class_path",
    "flatten",
    "is_model_class",
    "load_class",
    "resolve_model_reference",
]
