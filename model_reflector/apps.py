"""
Django app configuration for the model reflector.

This module configures:
- Registration of the ModelReflector singleton service
- The polymorphic alias map from settings
- Library settings validation
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for the model reflector."""

    name = "model_reflector"
    verbose_name = "Model Reflector"
    label = "model_reflector"

    def ready(self):
        """Initialize the application after Django has loaded."""
        logger.debug("AppConfig.ready() method called - starting initialization")
        try:
            valid = self._validate_configuration()

            self._register_model_reflector()

            if valid:
                self._apply_morph_map()

            logger.info("Model reflector initialized successfully")

        except Exception as e:
            logger.error(f"Error initializing model reflector: {e}")
            # Don't raise in production to avoid breaking the app
            if self._is_debug_mode():
                raise

    def _register_model_reflector(self):
        """Register ModelReflector as a singleton."""
        from .core.reflector import ModelReflector
        from .services import MODEL_REFLECTOR_SERVICE, register_singleton

        register_singleton(MODEL_REFLECTOR_SERVICE, ModelReflector)

    def _apply_morph_map(self):
        """Load polymorphic aliases configured in settings."""
        from .config_proxy import get_settings_proxy
        from .relations import Relation

        morph_map = get_settings_proxy().get("morph_map")
        if morph_map and isinstance(morph_map, dict):
            Relation.morph_map(morph_map)
            logger.debug("Registered %s morph map aliases from settings", len(morph_map))

    def _validate_configuration(self):
        """Validate library configuration; returns whether it is usable."""
        from .config_proxy import get_settings_proxy

        results = get_settings_proxy().validate()
        for warning in results["warnings"]:
            logger.debug("Configuration warning: %s", warning)
        if not results["valid"]:
            message = "; ".join(results["errors"])
            logger.warning(f"Configuration validation failed: {message}")
            if self._is_debug_mode():
                from django.core.exceptions import ImproperlyConfigured

                raise ImproperlyConfigured(message)
        return results["valid"]

    def _is_debug_mode(self):
        """Check if we're in debug mode."""
        from django.conf import settings as django_settings

        return getattr(django_settings, "DEBUG", False)
