"""
Default configuration for the model reflector.

Projects override any of these values through the ``MODEL_REFLECTOR`` Django
setting; keys are resolved with dot notation by ``SettingsProxy``.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "django-model-reflector"

SETTINGS_NAME = "MODEL_REFLECTOR"


LIBRARY_DEFAULTS: dict[str, Any] = {
    "model_settings": {
        # Top-level package holding the project's application code.
        "root_package": "app",
        # Sub-package of ``root_package`` that contains the model modules.
        # Empty means the models live directly in ``root_package``.
        "directory": "models",
    },
    # Polymorphic aliases, ``{"alias": "dotted.path.Model"}``.
    "morph_map": {},
}
