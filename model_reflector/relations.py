"""
Relation kinds understood by the model reflector.

Django describes relations with fields (``ForeignKey``, ``ManyToManyField``,
reverse ``*Rel`` objects, generic relations). The reflector works with a small
closed vocabulary on top of them; each kind wraps one source instance and one
Django relational field and exposes the same accessors:

- ``BelongsTo``: forward ``ForeignKey`` / ``OneToOneField``
- ``HasOne``: reverse side of a ``OneToOneField``
- ``HasMany``: reverse side of a ``ForeignKey``
- ``BelongsToMany``: ``ManyToManyField``, both directions
- ``MorphTo``: ``GenericForeignKey``
- ``MorphMany``: ``GenericRelation``

Model methods annotated to return one of these kinds are reflected as
relations too::

    class Order(models.Model):
        buyer = models.ForeignKey(Customer, on_delete=models.CASCADE)

        def customer(self) -> BelongsTo:
            return BelongsTo(self, "buyer")

The polymorphic alias registry (the "morph map") lives here as well.
"""

import logging
from typing import Any, Iterable, Optional

from django.apps import apps
from django.core.exceptions import ObjectDoesNotExist
from django.db import models
from django.db.models import ForeignObjectRel

from .exceptions import InvalidModelError
from .utils.normalization import class_path, load_class

logger = logging.getLogger(__name__)

# alias -> model class or dotted path
_MORPH_MAP: dict[str, Any] = {}


def _generic_field_classes() -> tuple[Optional[type], Optional[type]]:
    """Return (GenericForeignKey, GenericRelation) when contenttypes is installed."""
    if not apps.is_installed("django.contrib.contenttypes"):
        return None, None
    from django.contrib.contenttypes.fields import GenericForeignKey, GenericRelation

    return GenericForeignKey, GenericRelation


def accessor_name(field: Any) -> Optional[str]:
    """Name of the attribute a relational field is reached through on its model."""
    if isinstance(field, ForeignObjectRel):
        return field.get_accessor_name()
    return getattr(field, "name", None)


def relation_fields(model: type[models.Model]) -> dict[str, Any]:
    """
    Map accessor names to the relational fields of a model.

    Hidden reverse relations (``related_name="+"``) have no accessor and are
    left out.
    """
    fields: dict[str, Any] = {}
    for field in model._meta.get_fields():
        if not getattr(field, "is_relation", False):
            continue
        name = accessor_name(field)
        if name and name not in fields:
            fields[name] = field
    return fields


def relation_class_for_field(field: Any) -> type["Relation"]:
    """Pick the relation kind describing a Django relational field."""
    generic_fk, generic_relation = _generic_field_classes()
    if generic_fk is not None and isinstance(field, generic_fk):
        return MorphTo
    if generic_relation is not None and isinstance(field, generic_relation):
        return MorphMany
    if field.many_to_many:
        return BelongsToMany
    if field.one_to_many:
        return HasMany
    if field.one_to_one and isinstance(field, ForeignObjectRel):
        return HasOne
    return BelongsTo


class Relation:
    """
    Base class of all relation kinds.

    Args:
        parent: The model instance the relation starts from.
        field: A Django relational field, or its accessor name on ``parent``.
    """

    def __init__(self, parent: models.Model, field: Any):
        if not isinstance(parent, models.Model):
            raise InvalidModelError(
                f"Relation parent ({parent!r}) is not a model instance.", parent
            )
        if isinstance(field, str):
            resolved = relation_fields(type(parent)).get(field)
            if resolved is None:
                raise InvalidModelError(
                    f"'{field}' is not a relation of {class_path(parent)}.", field
                )
            field = resolved
        self.parent = parent
        self.field = field

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {class_path(self.parent)}.{self.name}>"

    @classmethod
    def for_field(cls, parent: models.Model, field: Any) -> "Relation":
        """Build the relation kind matching ``field``."""
        if isinstance(field, str):
            field = relation_fields(type(parent)).get(field, field)
        if isinstance(field, str):
            raise InvalidModelError(
                f"'{field}' is not a relation of {class_path(parent)}.", field
            )
        return relation_class_for_field(field)(parent, field)

    @property
    def name(self) -> Optional[str]:
        return accessor_name(self.field)

    @property
    def related_model(self) -> Optional[type[models.Model]]:
        return getattr(self.field, "related_model", None)

    def get_related(self) -> Optional[models.Model]:
        """Return an empty, unsaved instance of the related model."""
        related_model = self.related_model
        return related_model() if related_model is not None else None

    def get_related_table(self) -> Optional[str]:
        related_model = self.related_model
        return related_model._meta.db_table if related_model is not None else None

    def get_foreign_key_name(self) -> Optional[str]:
        """Attribute holding the key value, or None for kinds without one."""
        return None

    def get_qualified_foreign_key_name(self) -> Optional[str]:
        """``table.column`` of the foreign key, or None for kinds without one."""
        return None

    def get_results(self) -> Any:
        return getattr(self.parent, self.name)

    # Morph map

    @classmethod
    def morph_map(
        cls, mapping: Optional[dict[str, Any]] = None, merge: bool = True
    ) -> dict[str, Any]:
        """
        Read, extend or replace the polymorphic alias map.

        Args:
            mapping: ``{"alias": Model or "dotted.path.Model"}``.
            merge: Extend the current map instead of replacing it.

        Returns:
            The current map.
        """
        if mapping is not None:
            if not merge:
                _MORPH_MAP.clear()
            _MORPH_MAP.update(mapping)
            logger.debug("Morph map now holds %s aliases", len(_MORPH_MAP))
        return _MORPH_MAP

    @classmethod
    def get_morphed_model(cls, alias: str) -> Optional[Any]:
        """Return the class registered under ``alias``, or None."""
        if alias not in _MORPH_MAP:
            return None
        target = _MORPH_MAP[alias]
        if isinstance(target, type):
            return target
        return load_class(target) or target

    @classmethod
    def get_morph_alias(cls, model: type[models.Model]) -> Optional[str]:
        """Reverse lookup of the alias registered for ``model``."""
        candidates: Iterable[str] = (class_path(model), model._meta.label)
        for alias, target in _MORPH_MAP.items():
            if target is model:
                return alias
            if isinstance(target, str) and target.lstrip(".") in candidates:
                return alias
        return None


class BelongsTo(Relation):
    """The source row holds the key of a single related row."""

    def get_foreign_key_name(self) -> Optional[str]:
        return self.field.attname

    def get_qualified_foreign_key_name(self) -> Optional[str]:
        return f"{self.parent._meta.db_table}.{self.field.column}"

    def get_results(self) -> Optional[models.Model]:
        try:
            return getattr(self.parent, self.name)
        except ObjectDoesNotExist:
            return None


class HasOneOrMany(Relation):
    """Related rows hold the key of the source row."""

    def get_foreign_key_name(self) -> Optional[str]:
        return self.field.field.attname

    def get_qualified_foreign_key_name(self) -> Optional[str]:
        return f"{self.get_related_table()}.{self.field.field.column}"


class HasOne(HasOneOrMany):
    def get_results(self) -> Optional[models.Model]:
        try:
            return getattr(self.parent, self.name)
        except ObjectDoesNotExist:
            return None


class HasMany(HasOneOrMany):
    def get_results(self) -> models.QuerySet:
        return getattr(self.parent, self.name).all()


class BelongsToMany(Relation):
    """Rows linked through an intermediate table; no single foreign key."""

    def get_results(self) -> models.QuerySet:
        return getattr(self.parent, self.name).all()


class MorphTo(Relation):
    """Generic foreign key; the related model varies per row."""

    @property
    def related_model(self) -> Optional[type[models.Model]]:
        return None


class MorphMany(Relation):
    """Generic relation; related rows hold the source key and content type."""

    def get_foreign_key_name(self) -> Optional[str]:
        return self.field.object_id_field_name

    def get_qualified_foreign_key_name(self) -> Optional[str]:
        object_id_field = self.related_model._meta.get_field(
            self.field.object_id_field_name
        )
        return f"{self.get_related_table()}.{object_id_field.column}"

    def get_results(self) -> models.QuerySet:
        return getattr(self.parent, self.name).all()
