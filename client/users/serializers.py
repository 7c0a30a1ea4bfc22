"""
Serializers for the credentials sent to the backend auth endpoints.

Credentials are checked client-side before any request is made; the
backend remains the authority on whether they are correct or unique.
"""

import logging

from rest_framework import serializers

# Get structured logger for this module
logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6


class LoginSerializer(serializers.Serializer):
    """Username and password for ``POST /auth/login``."""

    username = serializers.CharField(
        help_text="Username for authentication",
        error_messages={
            "required": "Username is required",
            "blank": "Username is required",
        },
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        help_text="User password for authentication",
        error_messages={
            "required": "Password is required",
            "blank": "Password is required",
        },
    )


class RegisterSerializer(serializers.Serializer):
    """
    New account details for ``POST /auth/register``.

    Uniqueness of username and email is checked by the backend, which
    answers with a plain-text message when either is taken.
    """

    username = serializers.CharField(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        error_messages={
            "required": "Username is required",
            "blank": "Username is required",
            "min_length": f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
            "max_length": f"Username cannot exceed {USERNAME_MAX_LENGTH} characters",
        },
    )
    email = serializers.EmailField(
        error_messages={
            "required": "Email is required",
            "blank": "Email is required",
            "invalid": "Enter a valid email address",
        },
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            "required": "Password is required",
            "blank": "Password is required",
            "min_length": f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        },
    )

    def validate_username(self, value):
        if any(character.isspace() for character in value):
            logger.debug(
                "Username rejected - contains whitespace",
                extra={
                    "action": "username_validation_failure",
                    "component": "RegisterSerializer",
                },
            )
            raise serializers.ValidationError("Username cannot contain spaces")
        return value
