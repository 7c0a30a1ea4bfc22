# flake8: noqa
"""
Development environment settings for the Personal Finance client.

This configuration extends base settings with a local backend URL,
verbose logging and a rotating log file under BASE_DIR/logs.
"""

from .base import *
import logging
from .utils import load_environment_config

# Load environment configuration
config = load_environment_config("development")

# Environment identification
ENVIRONMENT = "development"

DEBUG = True
SECRET_KEY = config(
    "SECRET_KEY", default="django-insecure-dev-key-change-in-production"
)

# =============================================================================
# BACKEND API FOR DEVELOPMENT
# =============================================================================

FINANCE_API_BASE_URL = config(
    "FINANCE_API_BASE_URL", default="http://localhost:8080/api"
)

# =============================================================================
# ENHANCED LOGGING FOR DEVELOPMENT
# =============================================================================

# Ensure logs directory exists
os.makedirs(BASE_DIR / "logs", exist_ok=True)

LOGGING["handlers"]["development_file"] = {
    "level": "DEBUG",
    "class": "logging.handlers.RotatingFileHandler",
    "filename": BASE_DIR / "logs" / "client_dev.log",
    "maxBytes": 1024 * 1024 * 10,  # 10MB
    "backupCount": 5,
    "formatter": "structured",
    "encoding": "utf-8",
}

for logger_name in ["core", "finance", "users"]:
    if logger_name in LOGGING["loggers"]:
        LOGGING["loggers"][logger_name]["handlers"] = ["console", "development_file"]
        LOGGING["loggers"][logger_name]["level"] = "DEBUG"

logger = logging.getLogger(__name__)
logger.info(
    "Development environment initialized",
    extra={
        "environment": ENVIRONMENT,
        "debug_mode": DEBUG,
        "api_base_url": FINANCE_API_BASE_URL,
        "action": "environment_startup",
        "component": "settings",
    },
)
