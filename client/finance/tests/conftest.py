# finance/tests/conftest.py
from unittest.mock import MagicMock

import pytest
import requests

from core.application import FinanceApplication
from finance.api_client import ApiClient
from finance.services import (CategoryService, CurrencyService,
                              TransactionService)
from finance.state import TransactionState
from users.storage import SessionStorage

from .fake_backend import BASE_URL, FakeBackend

# =============================================================================
# STORAGE AND TRANSPORT FIXTURES
# =============================================================================


@pytest.fixture
def storage():
    """Session storage on the in-memory test cache, emptied after each test"""
    session_storage = SessionStorage()
    session_storage.clear()
    yield session_storage
    session_storage.clear()


@pytest.fixture
def signed_in_storage(storage):
    storage.save({"username": "testuser", "email": "test@example.com"}, "test-token")
    return storage


@pytest.fixture
def http_session():
    """Mocked requests.Session; configure return_value or side_effect per test"""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api_client(signed_in_storage, http_session):
    return ApiClient(signed_in_storage, base_url=BASE_URL, session=http_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def transaction_service_mock():
    return MagicMock(spec=TransactionService)


@pytest.fixture
def currency_service_mock():
    return MagicMock(spec=CurrencyService)


@pytest.fixture
def category_service_mock():
    return MagicMock(spec=CategoryService)


@pytest.fixture
def state(transaction_service_mock):
    return TransactionState(transaction_service_mock)


# =============================================================================
# FAKE BACKEND FIXTURES
# =============================================================================


@pytest.fixture
def fake_backend():
    backend = FakeBackend()
    backend.add_user("testuser", "secret123")
    return backend


@pytest.fixture
def app(storage, fake_backend):
    """Application wired to the in-memory backend, signed out"""
    http = MagicMock(spec=requests.Session)
    http.request.side_effect = fake_backend.request
    application = FinanceApplication(
        storage=storage,
        api_client=ApiClient(storage, base_url=BASE_URL, session=http),
    )
    application.start()
    return application


@pytest.fixture
def signed_in_app(app):
    app.login("testuser", "secret123")
    return app
