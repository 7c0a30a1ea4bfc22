# flake8: noqa
"""
Test settings: in-memory session storage and quiet logging.
"""

from .base import *

ENVIRONMENT = "test"

SECRET_KEY = "django-insecure-test-key"
FINANCE_API_BASE_URL = "http://testserver/api"
FINANCE_API_TIMEOUT = None

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "default",
    },
    SESSION_STORAGE_CACHE: {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "session-storage-tests",
        "TIMEOUT": None,
    },
}

for logger_name in ["core", "finance", "users"]:
    LOGGING["loggers"][logger_name]["level"] = "CRITICAL"
