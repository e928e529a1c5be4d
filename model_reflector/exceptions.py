"""
Custom exceptions for the model reflector.

Every error raised by the reflector derives from ``ModelReflectorError`` and
from the closest built-in exception, so callers can catch either.
"""

from typing import Any, Optional


class ModelReflectorError(Exception):
    """Base exception for model reflector errors."""


class InvalidModelError(ModelReflectorError, TypeError):
    """Raised when an argument is not a model instance or model class."""

    def __init__(self, message: str, value: Optional[Any] = None):
        self.value = value
        super().__init__(message)


class RelationNotFoundError(ModelReflectorError, LookupError):
    """Raised when a model declares no relation to the requested target."""

    def __init__(
        self,
        message: str,
        target_name: Optional[str] = None,
        model_name: Optional[str] = None,
    ):
        self.target_name = target_name
        self.model_name = model_name
        super().__init__(message)


class InvalidTraitError(ModelReflectorError, ValueError):
    """Raised when a trait reference does not denote a mixin class."""

    def __init__(self, message: str, trait: Optional[Any] = None):
        self.trait = trait
        super().__init__(message)
