"""
ModelReflector implementation.
"""

import inspect
import logging
from typing import Any, Optional

from django.core.exceptions import ValidationError
from django.db import models

from ..config_proxy import get_settings_proxy
from ..exceptions import (
    InvalidModelError,
    InvalidTraitError,
    ModelReflectorError,
    RelationNotFoundError,
)
from ..relations import Relation, relation_fields
from ..utils.normalization import (
    class_path,
    flatten,
    load_class,
    resolve_model_reference,
)
from .introspection import (
    is_relation_type,
    is_union,
    member_return_type,
    public_member_names,
    unwrap_callable,
)
from .types import ModelStructure, RelationDescriptor

logger = logging.getLogger(__name__)


class ModelReflector:
    """
    Reflection helpers for Django models.

    A reflector owns four caches that live as long as the reflector itself:
    relation descriptors per model class, resolved instances per model class
    and primary key, filesystem scan results per mode and the inferred model
    structure. Only the relation cache can be refreshed on demand.
    """

    def __init__(self):
        self._model_relations_cache: dict[type, dict[str, RelationDescriptor]] = {}
        self._model_repository: dict[type, dict[Any, Optional[models.Model]]] = {}
        self._filesystem_models: dict[str, list[type]] = {}
        self._model_structure_information: dict[type, ModelStructure] = {}

    # Configuration

    def get_models_directory(self) -> Optional[str]:
        """Sub-package of the root package that contains the model modules."""
        return get_settings_proxy().get("model_settings.directory") or None

    def get_root_package(self) -> str:
        return get_settings_proxy().get("model_settings.root_package", "app")

    def get_model_root_namespace(self) -> str:
        """Dotted package path under which the model modules live."""
        directory = self.get_models_directory()
        root_package = self.get_root_package()
        if not directory:
            return root_package
        return ".".join([root_package, *filter(None, directory.split("/"))])

    # Relations

    def get_model_relations(
        self, model: Any, force_refresh: bool = False
    ) -> dict[str, RelationDescriptor]:
        """
        Return the relations of a model keyed by relation name.

        Args:
            model: Model instance, model class, dotted path or label.
            force_refresh: Rebuild the entry even if it is cached.

        Returns:
            Ordered mapping of relation name to RelationDescriptor. Repeated
            calls return the same mapping object until a refresh is forced.
        """
        model_instance = self.get_model_instance(model)
        model_class = type(model_instance)

        if not force_refresh and model_class in self._model_relations_cache:
            return self._model_relations_cache[model_class]

        logger.debug("Reflecting relations of %s", class_path(model_class))
        relations: dict[str, RelationDescriptor] = {}

        for name in public_member_names(model_class):
            return_type = member_return_type(model_class, name)
            # Relations are supposed to have exactly one return type.
            if is_union(return_type) or not is_relation_type(return_type):
                continue
            relation = self._get_relation(model_instance, name)
            relations[name] = self._describe_relation(
                model_instance, name, return_type, relation
            )

        self._model_relations_cache[model_class] = relations
        return relations

    def _get_relation(self, model_instance: models.Model, name: str) -> Relation:
        model_class = type(model_instance)
        func = unwrap_callable(inspect.getattr_static(model_class, name, None))
        if func is not None:
            relation = getattr(model_instance, name)()
        else:
            relation = Relation.for_field(model_instance, relation_fields(model_class)[name])

        if not isinstance(relation, Relation):
            raise ModelReflectorError(
                f"{class_path(model_class)}.{name}() is annotated as a relation "
                f"but returned {type(relation).__name__}."
            )
        return relation

    def _describe_relation(
        self,
        model_instance: models.Model,
        name: str,
        return_type: type,
        relation: Relation,
    ) -> RelationDescriptor:
        descriptor = RelationDescriptor(relation=name, return_type=return_type.__name__)

        # Not available for some polymorphic and pivot relations.
        foreign_key_name = relation.get_foreign_key_name()
        if foreign_key_name is not None:
            qualified_foreign_key_name = relation.get_qualified_foreign_key_name()
            descriptor.related_class = relation.related_model
            descriptor.related_model = relation.get_related()
            descriptor.related_table = relation.get_related_table()
            descriptor.foreign_key_name = foreign_key_name
            descriptor.qualified_foreign_key_name = qualified_foreign_key_name
            descriptor.is_relation_parent = (
                qualified_foreign_key_name.rpartition(".")[0]
                == model_instance._meta.db_table
            )
        return descriptor

    def get_relation_by_target(self, model: Any, target: Any) -> str:
        """
        Return the name of the first relation of ``model`` pointing at ``target``.

        Raises:
            RelationNotFoundError: If no relation targets that model.
        """
        target_class = resolve_model_reference(target)
        target_name = class_path(target)

        for descriptor in self.get_model_relations(model).values():
            related_class = descriptor.related_class
            if related_class is None:
                continue
            if related_class is target_class or class_path(related_class) == target_name:
                return descriptor.relation

        model_name = class_path(model)
        raise RelationNotFoundError(
            f"Relation to target model {target_name} could not be found in the model {model_name}",
            target_name=target_name,
            model_name=model_name,
        )

    def has_relation(self, model: Any, relation: str) -> bool:
        """Check whether ``relation`` is a relation of ``model``."""
        model_instance = self.get_model_instance(model)
        return is_relation_type(self.get_method_return_type(model_instance, relation))

    def get_method_return_type(self, class_or_object: Any, method: str) -> Any:
        """
        Get the declared return type of a method on an object or non-model class.

        Model classes are rejected; pass an instance (or use
        ``get_model_relations``) instead.

        Returns:
            The return annotation, or None if the method does not exist or
            declares no return type.
        """
        target = class_or_object
        if isinstance(target, str):
            target = load_class(target.lstrip("."))
            if target is None:
                raise InvalidModelError(
                    f"Parameter class_or_object ({class_or_object}) passed to "
                    "get_method_return_type is not an object or a class",
                    class_or_object,
                )

        if isinstance(target, type):
            if issubclass(target, models.Model):
                raise InvalidModelError(
                    f"Parameter class_or_object ({class_path(target)}) passed to "
                    "get_method_return_type is a model class; pass an instance",
                    class_or_object,
                )
            return member_return_type(target, method)

        return member_return_type(type(target), method)

    # Models

    def get_model_instance(self, model: Any) -> models.Model:
        """Return ``model`` if it is an instance, else an empty instance of its class."""
        if isinstance(model, models.Model):
            return model
        return self._concrete_model_class(model)()

    def get_model_class(self, model: Any) -> type[models.Model]:
        """Return the model class of an instance, class, dotted path or label."""
        model_class = resolve_model_reference(model)
        if model_class is None:
            raise InvalidModelError(
                f"Parameter model ({model!r}) is not a model instance or model class.",
                model,
            )
        return model_class

    def _concrete_model_class(self, model: Any) -> type[models.Model]:
        model_class = self.get_model_class(model)
        if model_class._meta.abstract:
            raise InvalidModelError(
                f"Parameter model ({class_path(model_class)}) is an abstract model "
                "and cannot be instantiated.",
                model,
            )
        return model_class

    def get_model_short_name(self, model: Any) -> str:
        return self.get_model_class(model).__name__

    def resolve_model_object(
        self, model: Any, identifier: Any = None
    ) -> Optional[models.Model]:
        """
        Resolve a model by class and primary key.

        Without an identifier an empty, unsaved instance is returned and
        nothing is cached. With one, the row is fetched once and the result
        (None when no row matches) is kept for the reflector's lifetime.
        """
        model_class = self._concrete_model_class(model)

        if identifier is None or identifier == "":
            return model_class()

        try:
            key = model_class._meta.pk.to_python(identifier)
        except ValidationError as exc:
            raise InvalidModelError(
                f"Identifier {identifier!r} is not a valid primary key for "
                f"{class_path(model_class)}.",
                identifier,
            ) from exc

        repository = self._model_repository.setdefault(model_class, {})
        if key in repository:
            return repository[key]

        resolved = model_class._default_manager.filter(pk=key).first()
        if resolved is None:
            logger.debug("No %s found with primary key %r", class_path(model_class), key)

        return repository.setdefault(key, resolved)

    def resolve_related_model(
        self, model: models.Model, relation_name: str
    ) -> Optional[models.Model]:
        """
        Resolve the row a to-one relation of ``model`` points at.

        Only relations whose key lives on ``model`` (``BelongsTo``) resolve
        correctly; the caller is responsible for the relation shape.
        """
        if not isinstance(model, models.Model):
            raise InvalidModelError(
                f"Parameter model ({model!r}) passed to resolve_related_model "
                "is not a model instance.",
                model,
            )

        descriptor = self.get_model_relations(model).get(relation_name)
        if descriptor is None or descriptor.related_class is None:
            model_name = class_path(model)
            raise RelationNotFoundError(
                f"Relation {relation_name} of the model {model_name} does not "
                "resolve to a related model",
                target_name=relation_name,
                model_name=model_name,
            )

        return self.resolve_model_object(
            descriptor.related_class, getattr(model, descriptor.foreign_key_name, None)
        )

    def resolve_related_model_by_target(
        self, model: models.Model, target_model: Any
    ) -> Optional[models.Model]:
        return self.resolve_related_model(
            model, self.get_relation_by_target(model, self.get_model_class(target_model))
        )

    # Discovery

    def get_all_models(self, without_abstract: bool = True) -> list[type[models.Model]]:
        from .discovery import discover_models

        return discover_models(self, without_abstract)

    def get_all_instantiatable_models(
        self, *required_traits: Any
    ) -> dict[type[models.Model], models.Model]:
        """
        Map every concrete model found on disk to an empty instance.

        Args:
            *required_traits: Keep only models composing all of these mixins.
        """
        instantiatable = {model: model() for model in self.get_all_models()}

        if required_traits:
            instantiatable = {
                model: instance
                for model, instance in instantiatable.items()
                if self.model_has_traits(model, required_traits)
            }

        return instantiatable

    def get_instantiatable_model_structure_information(
        self,
    ) -> dict[type[models.Model], ModelStructure]:
        from .discovery import build_structure_information

        return build_structure_information(self)

    # Morph map & traits

    def get_class_from_morph_map(self, alias: str, strict: bool = False) -> Any:
        """
        Reverse lookup of a polymorphic alias.

        Returns the mapped class, else the alias itself, or None when strict.
        """
        model = Relation.get_morphed_model(alias)
        if model is not None:
            return model
        return None if strict else alias

    def get_morph_alias_for_class(self, model: Any) -> Optional[str]:
        return Relation.get_morph_alias(self.get_model_class(model))

    def model_has_traits(self, model: Any, *traits: Any) -> bool:
        """
        Check that a model composes every given mixin.

        Every trait is validated before any is checked.

        Raises:
            InvalidTraitError: If a trait does not denote a mixin class.
        """
        model_class = self.get_model_class(model)
        resolved = [self._resolve_trait(trait) for trait in flatten(traits)]
        return all(issubclass(model_class, trait) for trait in resolved)

    def _resolve_trait(self, trait: Any) -> type:
        resolved = load_class(trait.lstrip(".")) if isinstance(trait, str) else trait
        if not isinstance(resolved, type) or issubclass(resolved, models.Model):
            raise InvalidTraitError(
                f'Invalid parameter given to model_has_traits. "{class_path(trait)}" '
                "does not exist or is not a trait.",
                trait,
            )
        return resolved
