"""
Reflection helpers for Django models.

Discover the relations a model declares, resolve related rows with
memoization, scan the project for model classes and infer their hierarchy
from package layout.
"""

from .exceptions import (
    InvalidModelError,
    InvalidTraitError,
    ModelReflectorError,
    RelationNotFoundError,
)
from .relations import (
    BelongsTo,
    BelongsToMany,
    HasMany,
    HasOne,
    MorphMany,
    MorphTo,
    Relation,
)
from .services import get_model_reflector, reflector

__version__ = "0.1.0"

__all__ = [
    "BelongsTo",
    "BelongsToMany",
    "HasMany",
    "HasOne",
    "InvalidModelError",
    "InvalidTraitError",
    "ModelReflectorError",
    "MorphMany",
    "MorphTo",
    "Relation",
    "RelationNotFoundError",
    "get_model_reflector",
    "reflector",
]
