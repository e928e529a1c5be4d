"""
Normalization utilities for the model reflector.

This module provides functions for turning the loose references callers pass
around (instances, classes, dotted paths, ``app_label.ModelName`` labels) into
classes, and for flattening nested argument lists.
"""

from typing import Any, Iterable, List, Optional

from django.apps import apps
from django.db import models
from django.utils.module_loading import import_string


def class_path(value: Any) -> str:
    """
    Return the fully qualified dotted path of a class or of an object's class.

    Examples:
        >>> class_path(Order)
        "shop.models.order.Order"
    """
    if isinstance(value, str):
        return value
    cls = value if isinstance(value, type) else type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def load_class(path: str) -> Optional[type]:
    """
    Import a class from its dotted path.

    Returns None when the path does not import or does not name a class.
    """
    if not path or "." not in path:
        return None
    try:
        obj = import_string(path)
    except ImportError:
        return None
    return obj if isinstance(obj, type) else None


def is_model_class(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, models.Model)


def resolve_model_reference(value: Any) -> Optional[type[models.Model]]:
    """
    Resolve a model instance, class, dotted path or label to a model class.

    Args:
        value: Model instance, model class, ``"pkg.module.Model"`` path or
            ``"app_label.ModelName"`` label.

    Returns:
        The model class, or None if the value does not denote a model.
    """
    if isinstance(value, models.Model):
        return type(value)
    if is_model_class(value):
        return value
    if not isinstance(value, str):
        return None

    cls = load_class(value.lstrip("."))
    if is_model_class(cls):
        return cls

    if value.count(".") == 1:
        try:
            return apps.get_model(value)
        except (LookupError, ValueError):
            return None
    return None


def flatten(values: Iterable[Any]) -> List[Any]:
    """
    Flatten arbitrarily nested lists, tuples and sets.

    Examples:
        >>> flatten([A, [B, (C,)]])
        [A, B, C]
    """
    flat: List[Any] = []
    for value in values:
        if isinstance(value, (list, tuple, set, frozenset)):
            flat.extend(flatten(value))
        else:
            flat.append(value)
    return flat


def camel_case(value: str) -> str:
    """
    Convert a snake_case package segment into a CamelCase class name.

    Examples:
        >>> camel_case("sports_car")
        "SportsCar"
    """
    return "".join(part[:1].upper() + part[1:] for part in value.split("_") if part)
