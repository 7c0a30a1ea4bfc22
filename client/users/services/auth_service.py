"""
Authentication service for the backend's ``/auth`` endpoints.

Register and login both resolve to ``{"user": ..., "token": ...}``. The
backend answers with a flat ``{token, username, email}`` object; it is
folded into that shape here so the session holder sees one format.
"""

import logging

from rest_framework.exceptions import ValidationError

from finance.exceptions import BackendError

from ..serializers import LoginSerializer, RegisterSerializer

logger = logging.getLogger(__name__)

USER_FIELDS = ("id", "username", "email")


def normalize_auth_response(payload):
    """
    Fold an auth response into ``{"user": {...}, "token": "..."}``.

    Raises:
        BackendError: the response carries no token
    """
    payload = payload if isinstance(payload, dict) else {}
    token = payload.get("token")
    if not token:
        raise BackendError("Authentication response did not include a token")

    user = payload.get("user")
    if not isinstance(user, dict):
        user = {field: payload[field] for field in USER_FIELDS if field in payload}
    return {"user": user, "token": token}


class AuthService:
    def __init__(self, api_client, storage):
        self.api = api_client
        self.storage = storage

    def _validated(self, serializer_class, data):
        serializer = serializer_class(data=data)
        if not serializer.is_valid():
            logger.warning(
                "Credentials rejected by client-side validation",
                extra={
                    "fields": list(serializer.errors),
                    "action": "auth_validation_failure",
                    "component": "AuthService",
                    "severity": "low",
                },
            )
            raise ValidationError(serializer.errors)
        return dict(serializer.validated_data)

    def register(self, user_data):
        """
        Create an account and return ``{"user", "token"}``.

        Raises:
            ValidationError: invalid input, or username/email already taken
        """
        data = self._validated(RegisterSerializer, user_data)
        result = normalize_auth_response(self.api.post("/auth/register", data=data))

        logger.info(
            "User registered",
            extra={
                "username": result["user"].get("username"),
                "action": "user_registered",
                "component": "AuthService",
            },
        )
        return result

    def login(self, credentials):
        """
        Exchange username and password for a token.

        Raises:
            ValidationError: missing credentials
            NotAuthenticated / BackendError: the backend refused the login
        """
        data = self._validated(LoginSerializer, credentials)
        result = normalize_auth_response(self.api.post("/auth/login", data=data))

        logger.info(
            "User authenticated",
            extra={
                "username": result["user"].get("username"),
                "action": "user_authenticated",
                "component": "AuthService",
            },
        )
        return result

    def get_current_user(self):
        return self.api.get("/auth/me")

    def logout(self):
        """Forget the stored session; the backend keeps no session state."""
        self.storage.clear()
