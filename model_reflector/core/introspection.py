"""
Low-level introspection helpers.

These functions are the only place where the reflector looks at class members
and annotations; everything else works with their results.
"""

import inspect
import logging
import types
import typing
from typing import Any, Callable, Iterator, Optional

from django.db import models

from ..relations import Relation, relation_class_for_field, relation_fields
from ..utils.normalization import is_model_class

logger = logging.getLogger(__name__)


def is_union(annotation: Any) -> bool:
    """True for ``Union[...]``, ``Optional[...]`` and ``X | Y`` annotations."""
    origin = typing.get_origin(annotation)
    return origin is typing.Union or origin is types.UnionType


def is_relation_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, Relation)


def unwrap_callable(raw: Any) -> Optional[Callable]:
    """Return the plain function behind a class attribute, or None if it is not a method."""
    if isinstance(raw, (staticmethod, classmethod)):
        return raw.__func__
    if inspect.isfunction(raw):
        return raw
    return None


def return_annotation(func: Callable) -> Any:
    """
    Resolve the return annotation of a function.

    Parameter annotations that fail to resolve do not affect the result.
    Return annotations that cannot be resolved are returned as written.
    """
    try:
        return typing.get_type_hints(func).get("return")
    except (NameError, TypeError, AttributeError) as exc:
        logger.debug("Could not resolve type hints of %r: %s", func, exc)

    annotation = (getattr(func, "__annotations__", None) or {}).get("return")
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, getattr(func, "__globals__", {}))
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation


def public_member_names(cls: type) -> Iterator[str]:
    """
    Yield the public member names of a class.

    Subclasses come before their bases and members keep their declaration
    order. Members of ``object`` and ``models.Model`` are not reported; for
    models the relational accessors follow.
    """
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object or klass is models.Model:
            continue
        for name in vars(klass):
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            yield name

    if is_model_class(cls):
        for name in relation_fields(cls):
            if name not in seen:
                seen.add(name)
                yield name


def member_return_type(cls: type, name: str) -> Any:
    """
    Return the declared return type of the member ``name`` of ``cls``.

    Methods report their return annotation. On models, relational accessors
    report the relation kind of their field. Anything else (missing member,
    plain attribute, property, unannotated method) reports None.
    """
    raw = inspect.getattr_static(cls, name, None)
    func = unwrap_callable(raw)
    if func is not None:
        return return_annotation(func)

    if is_model_class(cls):
        field = relation_fields(cls).get(name)
        if field is not None:
            return relation_class_for_field(field)
    return None
