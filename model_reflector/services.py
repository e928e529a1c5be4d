"""
Named singleton services.

The reflector is exposed to the host project as one named singleton. The app
config registers its factory under ``MODEL_REFLECTOR_SERVICE``; callers
resolve it with ``get_model_reflector()`` or use the lazy ``reflector`` facade.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

MODEL_REFLECTOR_SERVICE = "ModelReflector"

ServiceFactory = Callable[[], Any]

_factories: dict[str, ServiceFactory] = {}
_instances: dict[str, Any] = {}


def register_singleton(name: str, factory: ServiceFactory) -> None:
    """Register ``factory`` as the builder of the singleton ``name``."""
    _factories[name] = factory
    _instances.pop(name, None)
    logger.debug("Registered singleton service '%s'", name)


def resolve(name: str) -> Any:
    """Return the singleton ``name``, building it on first use."""
    if name in _instances:
        return _instances[name]
    try:
        factory = _factories[name]
    except KeyError:
        raise LookupError(f"No service registered under '{name}'") from None
    return _instances.setdefault(name, factory())


def forget(name: str) -> None:
    """Drop the built instance of ``name``; the next resolve builds a new one."""
    _instances.pop(name, None)


def _default_reflector_factory():
    from .core.reflector import ModelReflector

    return ModelReflector()


def get_model_reflector():
    """Return the process-wide ModelReflector."""
    if MODEL_REFLECTOR_SERVICE not in _factories:
        register_singleton(MODEL_REFLECTOR_SERVICE, _default_reflector_factory)
    return resolve(MODEL_REFLECTOR_SERVICE)


class ReflectorFacade:
    """Forwards attribute access to the current singleton reflector."""

    def __getattr__(self, name: str) -> Any:
        return getattr(get_model_reflector(), name)

    def __repr__(self) -> str:
        return "<ReflectorFacade>"


reflector = ReflectorFacade()
