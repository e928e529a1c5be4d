"""
Configuration management for the model reflector.

This module provides a settings proxy that resolves reflector settings from
runtime overrides, the ``MODEL_REFLECTOR`` Django setting and the library
defaults, in that order.
"""

from importlib.util import find_spec
from typing import Any

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME

# Runtime overrides (avoids modifying Django settings)
_RUNTIME_SETTINGS: dict[str, Any] = {}

# Marks a key absent from a settings source; an explicit None is a value
_MISSING = object()


class SettingsProxy:
    """
    Proxy for accessing reflector settings with hierarchical resolution.

    Settings are resolved in the following order:
    1. Runtime overrides (via configure_runtime_settings)
    2. Global Django settings (MODEL_REFLECTOR)
    3. Library defaults (LIBRARY_DEFAULTS)
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution and caching.

        Args:
            key: Setting key to retrieve, dot notation allowed
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        for source in (
            _RUNTIME_SETTINGS,
            getattr(settings, SETTINGS_NAME, None) or {},
            LIBRARY_DEFAULTS,
        ):
            value = self._get_nested_value(source, key)
            if value is not _MISSING:
                self._cache[key] = value
                return value

        self._cache[key] = default
        return default

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value, or _MISSING if the key is absent
        """
        if not isinstance(data, dict):
            return _MISSING

        current = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return _MISSING
            current = current[k]

        return current

    def clear_cache(self) -> None:
        """Clear the settings cache."""
        self._cache.clear()

    def validate(self) -> dict[str, Any]:
        """
        Validate current settings configuration.

        Returns:
            Dictionary with validation results
        """
        validation_results = {"valid": True, "errors": [], "warnings": []}

        root_package = self.get("model_settings.root_package")
        if not root_package or not isinstance(root_package, str):
            validation_results["errors"].append(
                "Setting 'model_settings.root_package' must be a non-empty string"
            )
            validation_results["valid"] = False
        elif find_spec(root_package.split(".")[0]) is None:
            validation_results["warnings"].append(
                f"Model root package '{root_package}' could not be found"
            )

        directory = self.get("model_settings.directory")
        if directory and not isinstance(directory, str):
            validation_results["errors"].append(
                "Setting 'model_settings.directory' must be a string"
            )
            validation_results["valid"] = False

        morph_map = self.get("morph_map")
        if morph_map is not None and not isinstance(morph_map, dict):
            validation_results["errors"].append("Setting 'morph_map' must be a dict")
            validation_results["valid"] = False
        elif not morph_map:
            validation_results["warnings"].append("No morph map aliases configured")

        return validation_results


def configure_runtime_settings(**overrides: Any) -> None:
    """Apply runtime overrides on top of the Django settings."""
    _RUNTIME_SETTINGS.update(overrides)


def clear_runtime_settings() -> None:
    _RUNTIME_SETTINGS.clear()


def get_settings_proxy() -> SettingsProxy:
    """
    Get a fresh settings proxy.

    A new proxy is returned on every call so that changes to Django settings
    (``override_settings`` in tests, for instance) are always observed.
    """
    return SettingsProxy()
