"""
Persistent storage for the authentication token and user snapshot.

Two entries are kept in a Django cache alias (file-based by default, so a
session survives process restarts): the raw bearer token under ``token``
and the JSON-encoded user under ``user``. Entries never expire; they are
removed only on logout or when the snapshot turns out to be corrupt.
"""

import json
import logging

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionStorage:
    def __init__(self, cache_alias=None):
        self.cache_alias = cache_alias or settings.SESSION_STORAGE_CACHE
        self.cache = caches[self.cache_alias]

    def get_token(self):
        return self.cache.get(TOKEN_KEY)

    def get_user_data(self):
        """Raw JSON text of the stored user snapshot, or None."""
        return self.cache.get(USER_KEY)

    def save(self, user, token):
        self.cache.set_many(
            {TOKEN_KEY: token, USER_KEY: json.dumps(user)},
            timeout=None,
        )

        logger.debug(
            "Session persisted",
            extra={
                "cache_alias": self.cache_alias,
                "action": "session_storage_saved",
                "component": "SessionStorage",
            },
        )

    def clear(self):
        self.cache.delete_many([TOKEN_KEY, USER_KEY])

        logger.debug(
            "Session storage cleared",
            extra={
                "cache_alias": self.cache_alias,
                "action": "session_storage_cleared",
                "component": "SessionStorage",
            },
        )
