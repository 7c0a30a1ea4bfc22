# users/services/__init__.py
from .auth_service import AuthService, normalize_auth_response

__all__ = [
    "AuthService",
    "normalize_auth_response",
]
