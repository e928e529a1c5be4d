"""
Filesystem discovery logic for ModelReflector.
"""

import logging
from importlib import import_module
from pathlib import Path
from types import ModuleType
from typing import Iterator, Optional

from django.core.exceptions import ImproperlyConfigured
from django.db import models

from ..utils.normalization import camel_case, class_path, is_model_class, load_class
from .types import ModelStructure

logger = logging.getLogger(__name__)

WITH_ABSTRACT = "withAbstract"
WITHOUT_ABSTRACT = "withoutAbstract"


def get_models_path(reflector) -> Path:
    """Directory that holds the model modules."""
    root_package = reflector.get_root_package()
    try:
        package = import_module(root_package)
    except ImportError as exc:
        raise ImproperlyConfigured(
            f"Model root package '{root_package}' could not be imported: {exc}"
        ) from exc

    package_paths = list(getattr(package, "__path__", []))
    if not package_paths:
        raise ImproperlyConfigured(f"Model root package '{root_package}' is not a package")

    path = Path(package_paths[0])
    directory = reflector.get_models_directory()
    if directory:
        path = path.joinpath(*filter(None, directory.split("/")))
    if not path.is_dir():
        raise ImproperlyConfigured(f"Model directory '{path}' does not exist")
    return path


def iter_module_names(path: Path, root_namespace: str) -> Iterator[str]:
    """Map every python file below ``path`` to its dotted module name."""
    for file_path in sorted(path.rglob("*.py")):
        parts = list(file_path.relative_to(path).with_suffix("").parts)
        if parts[-1] == "__init__":
            parts.pop()
        yield ".".join([root_namespace, *parts])


def _import_module(module_name: str) -> Optional[ModuleType]:
    try:
        return import_module(module_name)
    except Exception as exc:
        logger.warning("Skipping module '%s' during model discovery: %s", module_name, exc)
        return None


def _declared_models(module: ModuleType) -> Iterator[type[models.Model]]:
    """Model classes defined in ``module`` itself, in declaration order."""
    for obj in list(vars(module).values()):
        if is_model_class(obj) and obj.__module__ == module.__name__:
            yield obj


def discover_models(reflector, without_abstract: bool = True) -> list[type[models.Model]]:
    """Scan the models directory for model classes, once per mode."""
    identifier = WITHOUT_ABSTRACT if without_abstract else WITH_ABSTRACT
    if identifier in reflector._filesystem_models:
        return reflector._filesystem_models[identifier]

    root_namespace = reflector.get_model_root_namespace()
    models_path = get_models_path(reflector)
    logger.info("Starting model discovery in %s (%s)...", models_path, identifier)

    discovered: list[type[models.Model]] = []
    for module_name in iter_module_names(models_path, root_namespace):
        module = _import_module(module_name)
        if module is None:
            continue
        for model in _declared_models(module):
            if without_abstract and model._meta.abstract:
                continue
            if model not in discovered:
                discovered.append(model)
                logger.debug("Discovered model %s", class_path(model))

    logger.info("Model discovery completed. Found %s models.", len(discovered))
    return reflector._filesystem_models.setdefault(identifier, discovered)


def declaring_namespace(model: type) -> str:
    """Package that contains the module a model is declared in."""
    return model.__module__.rpartition(".")[0]


def supposed_parent_class(model: type, root_namespace: str) -> Optional[type]:
    """
    Guess the parent of a model from the package it lives in.

    ``<root>.vehicle.car.Car`` is assumed to belong to ``<root>.vehicle.Vehicle``
    when that name imports as a class. Models directly in the root namespace
    have no parent.
    """
    namespace = declaring_namespace(model)
    if not namespace or namespace == root_namespace:
        return None
    candidate = load_class(f"{namespace}.{camel_case(namespace.rpartition('.')[2])}")
    if candidate is None or candidate is model:
        return None
    return candidate


def build_structure_information(reflector) -> dict[type[models.Model], ModelStructure]:
    """Infer parent and child classes of every concrete model."""
    if reflector._model_structure_information:
        return reflector._model_structure_information

    root_namespace = reflector.get_model_root_namespace()

    # Determine the parent class based on the namespace.
    parents = {
        model: supposed_parent_class(model, root_namespace)
        for model in reflector.get_all_instantiatable_models()
    }

    # Determine the child classes based on the previously determined parents.
    for model, parent in parents.items():
        reflector._model_structure_information[model] = ModelStructure(
            parent_class=parent,
            child_classes=[child for child, other in parents.items() if other is model],
        )

    return reflector._model_structure_information
