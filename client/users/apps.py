"""
Django AppConfig for the users application.

The users application owns the client side of authentication: the
persisted session storage, the in-memory session holder and the
backend auth endpoints.
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Configuration class for the users application."""

    # Application name (Python path)
    name = "users"
