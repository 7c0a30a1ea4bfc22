"""
Transaction entry forms.

A form owns the draft a user is editing: it fills initial values (blank for
a new transaction, copied from an existing one when editing), validates the
draft with a DRF serializer and hands valid drafts to ``TransactionState``.
Errors are kept as a field -> first message mapping so they can be shown
next to the inputs.
"""

import logging

from django.utils import timezone
from rest_framework.exceptions import APIException

from .constants import COMMON_CATEGORIES, DEFAULT_CURRENCY, EXPENSE
from .converter import CurrencyConverter
from .exceptions import get_error_message
from .mixins import ServiceExceptionHandlerMixin
from .serializers import (EnhancedTransactionDraftSerializer,
                          TransactionDraftSerializer)

logger = logging.getLogger(__name__)

FORM_ERROR_KEY = "form"


class TransactionForm:
    """Create or edit a single transaction."""

    serializer_class = TransactionDraftSerializer

    def __init__(self, state, transaction=None):
        self.state = state
        self.transaction = transaction
        self.errors = {}
        self.initial = self.get_initial()

    @property
    def is_editing(self):
        return self.transaction is not None

    def get_initial(self):
        if self.transaction is None:
            return {
                "description": "",
                "amount": "",
                "type": EXPENSE,
                "category": "",
                "notes": "",
                "transactionDate": timezone.now(),
            }
        return {
            "description": self.transaction.description or "",
            "amount": self.transaction.amount,
            "type": self.transaction.type or EXPENSE,
            "category": self.transaction.category or "",
            "notes": self.transaction.notes or "",
            "transactionDate": self.transaction.transaction_date or timezone.now(),
        }

    def validate(self, data):
        serializer = self.serializer_class(data=data)
        if serializer.is_valid():
            self.errors = {}
        else:
            self.errors = serializer.field_errors
        return not self.errors

    def prepare_draft(self, data):
        return dict(data)

    def submit(self, data):
        """
        Validate ``data`` and save it through the transaction state.

        Returns:
            The saved ``Transaction``, or the errors dict when validation or
            the backend call failed.
        """
        draft = self.prepare_draft(data)
        if not self.validate(draft):
            logger.debug(
                "Transaction form rejected",
                extra={
                    "fields": list(self.errors),
                    "is_editing": self.is_editing,
                    "action": "transaction_form_invalid",
                    "component": type(self).__name__,
                },
            )
            return self.errors

        try:
            if self.is_editing:
                transaction = self.state.update(self.transaction.id, draft)
            else:
                transaction = self.state.create(draft)
        except APIException as e:
            self.errors = {FORM_ERROR_KEY: get_error_message(e)}
            return self.errors

        self.errors = {}
        if not self.is_editing:
            self.initial = self.get_initial()
        return transaction


class EnhancedTransactionForm(ServiceExceptionHandlerMixin, TransactionForm):
    """
    Transaction form with category selection and currency conversion.

    A category is mandatory. The ``currency`` field records which currency
    the amount was entered in; it is used for conversion only and never
    leaves the client.
    """

    serializer_class = EnhancedTransactionDraftSerializer

    def __init__(self, state, category_service, currency_service, transaction=None):
        super().__init__(state, transaction=transaction)
        self.session = state.session
        self.category_service = category_service
        self.currency_service = currency_service
        self.converter = CurrencyConverter(currency_service, session=state.session)
        self.categories = []
        self.supported_currencies = []

    def get_initial(self):
        initial = super().get_initial()
        initial["currency"] = DEFAULT_CURRENCY
        return initial

    def load_initial_data(self):
        """Fetch the category choices and the supported currencies."""
        try:
            self.categories = self.handle_service_call(
                self.category_service.get_all_categories
            )
            self.supported_currencies = self.handle_service_call(
                self.currency_service.get_supported_currencies
            )
        except APIException:
            self.errors = {FORM_ERROR_KEY: "Failed to load form data"}
            return False
        return True

    def category_choices(self, transaction_type):
        """Names offered for ``transaction_type``; common ones until loaded."""
        if self.categories:
            return [category.name for category in self.categories]
        return list(COMMON_CATEGORIES.get(transaction_type, []))

    def apply_conversion(self, data, to_currency):
        """
        Convert the draft's amount into ``to_currency``.

        Returns:
            A draft copy with the converted amount and currency, or None
            when the conversion failed (see ``converter.error``).
        """
        result = self.converter.convert(
            data.get("amount"), data.get("currency") or DEFAULT_CURRENCY, to_currency
        )
        if result is None:
            return None
        return self.converter.merge_into(data)

    def prepare_draft(self, data):
        return self.converter.merge_into(data)

    def submit(self, data):
        result = super().submit(data)
        if not self.errors:
            self.converter.reset()
        return result
