"""
Settings used by the test suite.
"""

SECRET_KEY = "django-insecure-model-reflector-tests"

DEBUG = False

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "model_reflector",
    "test_app",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

MIGRATION_MODULES = {"test_app": None}

USE_TZ = True

MODEL_REFLECTOR = {
    "model_settings": {
        "root_package": "test_app",
        "directory": "models",
    },
    "morph_map": {
        "customer": "test_app.models.customer.Customer",
    },
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "model_reflector": {"handlers": ["console"], "level": "WARNING"},
    },
}
