# flake8: noqa
"""
Base settings shared by every environment of the Personal Finance client.

The client never talks to a database: Django provides the settings layer,
the cache framework used as persistent session storage, the logging
configuration and the management command runner. Environment modules
(dev, test) extend these values.
"""

import os
from pathlib import Path

from decouple import config

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = config("SECRET_KEY", default="django-insecure-client-key")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = []

# =============================================================================
# APPLICATIONS
# =============================================================================

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "finance",
    "users",
]

# No local persistence engine - every entity is owned by the backend.
DATABASES = {}

USE_TZ = True
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"

# =============================================================================
# BACKEND API
# =============================================================================

FINANCE_API_BASE_URL = config(
    "FINANCE_API_BASE_URL", default="http://localhost:8080/api"
)
# None keeps the transport default (no client-side timeout).
FINANCE_API_TIMEOUT = config(
    "FINANCE_API_TIMEOUT", default=None, cast=lambda v: float(v) if v else None
)

REST_FRAMEWORK = {
    "COERCE_DECIMAL_TO_STRING": False,
    "DATETIME_FORMAT": "iso-8601",
}

# =============================================================================
# SESSION STORAGE (token + user snapshot)
# =============================================================================

SESSION_STORAGE_CACHE = "session_storage"
SESSION_STORAGE_DIR = config(
    "SESSION_STORAGE_DIR", default=str(BASE_DIR / ".session")
)

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
    SESSION_STORAGE_CACHE: {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": SESSION_STORAGE_DIR,
        "TIMEOUT": None,
    },
}

# =============================================================================
# LOGGING
# =============================================================================

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "INFO",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "core": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "finance": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "users": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}
