# users/tests/conftest.py
from unittest.mock import MagicMock

import pytest

from finance.api_client import ApiClient
from users.storage import SessionStorage


@pytest.fixture
def storage():
    """Session storage on the in-memory test cache, emptied after each test"""
    session_storage = SessionStorage()
    session_storage.clear()
    yield session_storage
    session_storage.clear()


@pytest.fixture
def api_mock():
    return MagicMock(spec=ApiClient)
