"""
In-memory authentication session backed by ``SessionStorage``.
"""

import json
import logging

logger = logging.getLogger(__name__)


class AuthSession:
    """
    Who is signed in, restored from storage at startup.

    ``user`` is the in-memory snapshot; the token lives only in storage so
    that the API client always reads the current one.
    """

    def __init__(self, storage):
        self.storage = storage
        self.user = None
        self.loading = True

    @property
    def token(self):
        return self.storage.get_token()

    def restore(self):
        """
        Rebuild the session from storage without contacting the backend.

        A stored snapshot that cannot be decoded into a user object wipes
        both storage keys.

        Returns:
            dict: the restored user, or None when signed out
        """
        token = self.storage.get_token()
        raw_user = self.storage.get_user_data()

        if token and raw_user:
            try:
                user = json.loads(raw_user)
            except (TypeError, ValueError):
                user = None

            if isinstance(user, dict):
                self.user = user
                logger.info(
                    "Session restored from storage",
                    extra={
                        "username": user.get("username"),
                        "action": "session_restored",
                        "component": "AuthSession",
                    },
                )
            else:
                logger.error(
                    "Stored user snapshot is corrupt - clearing session",
                    extra={
                        "action": "session_restore_failed",
                        "component": "AuthSession",
                        "severity": "medium",
                    },
                )
                self.storage.clear()

        self.loading = False
        return self.user

    def login(self, user, token):
        self.storage.save(user, token)
        self.user = user

        logger.info(
            "User logged in",
            extra={
                "username": user.get("username"),
                "action": "session_login",
                "component": "AuthSession",
            },
        )

    def logout(self):
        username = self.user.get("username") if self.user else None
        self.storage.clear()
        self.user = None

        logger.info(
            "User logged out",
            extra={
                "username": username,
                "action": "session_logout",
                "component": "AuthSession",
            },
        )

    def is_authenticated(self):
        return bool(self.user) and bool(self.storage.get_token())
