"""
Composition root of the finance client.

``FinanceApplication`` builds every collaborator explicitly, in dependency
order: session storage, API client, services, auth session and, once a user
is signed in, the transaction state. Nothing is created at import time.
"""

import logging

from finance.api_client import ApiClient
from finance.forms import EnhancedTransactionForm, TransactionForm
from finance.services import (CategoryService, CurrencyService,
                              TransactionService)
from finance.state import TransactionState
from users.services import AuthService
from users.session import AuthSession
from users.storage import SessionStorage

logger = logging.getLogger(__name__)


class FinanceApplication:
    """
    One running client: a session plus the services bound to it.

    Args:
        storage: session storage (defaults to the configured cache alias)
        api_client: HTTP client (defaults to one bound to ``storage``)
    """

    def __init__(self, storage=None, api_client=None):
        self.storage = storage or SessionStorage()
        self.api_client = api_client or ApiClient(self.storage)
        self.auth_service = AuthService(self.api_client, self.storage)
        self.transaction_service = TransactionService(self.api_client)
        self.category_service = CategoryService(self.api_client)
        self.currency_service = CurrencyService(self.api_client)
        self.session = AuthSession(self.storage)
        self.transactions = None

    def _open_transactions(self):
        if self.transactions is not None:
            self.transactions.teardown()
        self.transactions = TransactionState(self.transaction_service, session=self.session)
        return self.transactions

    def start(self):
        """
        Restore a persisted session, if any.

        Returns:
            dict: the signed-in user, or None
        """
        user = self.session.restore()
        if self.session.is_authenticated():
            self._open_transactions()

        logger.info(
            "Finance client started",
            extra={
                "authenticated": self.session.is_authenticated(),
                "username": user.get("username") if user else None,
                "action": "application_start",
                "component": "FinanceApplication",
            },
        )
        return user

    def login(self, username, password):
        result = self.auth_service.login({"username": username, "password": password})
        self.session.login(result["user"], result["token"])
        self._open_transactions()
        return result["user"]

    def register(self, username, email, password):
        result = self.auth_service.register(
            {"username": username, "email": email, "password": password}
        )
        self.session.login(result["user"], result["token"])
        self._open_transactions()
        return result["user"]

    def logout(self):
        """Discard cached transactions and forget the stored session."""
        if self.transactions is not None:
            self.transactions.teardown()
            self.transactions = None
        self.session.logout()

    def transaction_form(self, transaction=None):
        return TransactionForm(self.transactions, transaction=transaction)

    def enhanced_transaction_form(self, transaction=None):
        return EnhancedTransactionForm(
            self.transactions,
            self.category_service,
            self.currency_service,
            transaction=transaction,
        )
