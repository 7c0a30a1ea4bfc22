"""
Client-side cache of the signed-in user's transactions.

``TransactionState`` holds the current page of transactions, the summary and
the category labels, together with the query that produced the page and the
last error. It mirrors the backend on a best-effort basis: after every
mutation the affected dependents are fetched again rather than recomputed
locally.

Each logical resource is loaded under a ticket from ``RequestSequencer``.
Only the newest ticket per resource may write to the cache, so a slow
response that lost the race against a newer request is dropped.
"""

import itertools
import logging
import threading

from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError

from .exceptions import get_error_message
from .mixins import ServiceExceptionHandlerMixin
from .models import TransactionPage, TransactionQuery
from .serializers import (TransactionDraftSerializer,
                          TransactionQuerySerializer, first_errors)
from .services.transaction_service import TransactionService

logger = logging.getLogger(__name__)

TRANSACTIONS = "transactions"
RECENT = "recent"
SUMMARY = "summary"
CATEGORIES = "categories"

# Dependent resources refetched after each successful mutation.
INVALIDATION_RULES = {
    "create": (SUMMARY, CATEGORIES),
    "update": (SUMMARY, CATEGORIES),
    "delete": (SUMMARY,),
}

_DISCARDED = object()


class RequestSequencer:
    """
    Issues monotonic tickets per resource and decides which response wins.

    A response is accepted only while its ticket is still the newest one
    issued for its resource and the sequencer has not been closed.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = {}
        self._lock = threading.Lock()
        self.closed = False

    def issue(self, resource):
        with self._lock:
            ticket = next(self._counter)
            self._latest[resource] = ticket
            return ticket

    def finish(self, resource, ticket):
        """Mark ``ticket`` done; returns whether its response may be applied."""
        with self._lock:
            current = not self.closed and self._latest.get(resource) == ticket
            if current:
                del self._latest[resource]
            return current

    @property
    def pending(self):
        with self._lock:
            return bool(self._latest)

    def close(self):
        with self._lock:
            self.closed = True
            self._latest.clear()


class TransactionState(ServiceExceptionHandlerMixin):
    """
    Cache and operations for the transaction list of one signed-in session.

    Attributes:
        transactions: items of the current page, newest first by default
        page: paging metadata of the last accepted list response
        recent: the backend's "recent transactions" list
        summary: last fetched ``Summary`` or None
        categories: distinct category labels used by transactions
        query: ``TransactionQuery`` the current page was loaded with
        error: message of the last failed operation, or None
    """

    def __init__(self, transaction_service, session=None):
        self.transaction_service = transaction_service
        self.session = session
        self.transactions = []
        self.page = TransactionPage()
        self.recent = []
        self.summary = None
        self.categories = []
        self.query = TransactionQuery()
        self.error = None
        self._sequencer = RequestSequencer()

    @property
    def loading(self):
        return self._sequencer.pending

    @property
    def is_closed(self):
        return self._sequencer.closed

    # ------------------------------------------------------------------
    # Sequenced reads
    # ------------------------------------------------------------------

    def _fetch(self, resource, service_call, *args):
        """
        Run a read under a fresh ticket.

        Returns the service result, or ``_DISCARDED`` when the response was
        superseded or the state was torn down. Failures of a current request
        are recorded in ``error`` and returned as ``_DISCARDED`` too.
        """
        ticket = self._sequencer.issue(resource)
        try:
            result = self.handle_service_call(service_call, *args)
        except APIException as e:
            if self._sequencer.finish(resource, ticket):
                self.error = get_error_message(e)
            else:
                self._log_discarded(resource, ticket, failed=True)
            return _DISCARDED

        if not self._sequencer.finish(resource, ticket):
            self._log_discarded(resource, ticket)
            return _DISCARDED
        return result

    def _log_discarded(self, resource, ticket, failed=False):
        logger.info(
            "Stale response discarded",
            extra={
                "resource": resource,
                "ticket": ticket,
                "failed": failed,
                "closed": self._sequencer.closed,
                "action": "stale_response_discarded",
                "component": "TransactionState",
            },
        )

    def _load_query(self, **changes):
        current = self.query
        data = {
            "page": current.page,
            "size": current.size,
            "sort_by": current.sort_by,
            "sort_dir": current.sort_dir,
            "type": current.type,
            "category": current.category,
        }
        data.update(changes)

        serializer = TransactionQuerySerializer(data=data)
        if not serializer.is_valid():
            self.error = "; ".join(first_errors(serializer.errors).values())
            logger.warning(
                "Transaction query rejected",
                extra={
                    "query": data,
                    "errors": serializer.errors,
                    "action": "transaction_query_invalid",
                    "component": "TransactionState",
                    "severity": "low",
                },
            )
            return None

        query = serializer.to_query()
        page = self._fetch(TRANSACTIONS, self.transaction_service.query, query)
        if page is _DISCARDED:
            return None

        self.query = query
        self.page = page
        self.transactions = list(page.items)
        self.error = None

        logger.debug(
            "Transactions loaded",
            extra={
                "page": page.page,
                "size": page.size,
                "total_elements": page.total_elements,
                "filter_type": query.type,
                "filter_category": query.category,
                "action": "transactions_loaded",
                "component": "TransactionState",
            },
        )
        return page

    def load(self, page=0, size=10, sort_by="transactionDate", sort_dir="desc"):
        """
        Load one page of transactions, keeping the active filters.

        Returns:
            TransactionPage, or None when the query was invalid, the request
            failed (see ``error``) or the response was superseded.
        """
        return self._load_query(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    def load_query(self, **changes):
        """
        Merge ``changes`` (page, size, sort_by, sort_dir, type, category) into
        the active query and load it. The query is committed only on success.
        """
        return self._load_query(**changes)

    def reload(self):
        return self._load_query()

    def load_recent(self):
        recent = self._fetch(RECENT, self.transaction_service.get_recent_transactions)
        if recent is _DISCARDED:
            return None
        self.recent = recent
        return recent

    def load_summary(self):
        summary = self._fetch(SUMMARY, self.transaction_service.get_summary)
        if summary is _DISCARDED:
            return None
        self.summary = summary
        return summary

    def load_categories(self):
        categories = self._fetch(CATEGORIES, self.transaction_service.get_categories)
        if categories is _DISCARDED:
            return None
        self.categories = categories
        return categories

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def filter_by_type(self, transaction_type):
        """Show only ``INCOME`` or ``EXPENSE``; None removes the type filter."""
        return self._load_query(type=transaction_type, page=0)

    def filter_by_category(self, category):
        return self._load_query(category=category or None, page=0)

    def clear_filters(self):
        return self._load_query(type=None, category=None, page=0)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _validate_draft(self, draft):
        serializer = TransactionDraftSerializer(data=draft)
        if not serializer.is_valid():
            errors = first_errors(serializer.errors)
            self.error = "; ".join(errors.values())
            raise DRFValidationError(errors)
        return TransactionService.format_for_api(serializer.validated_data)

    def _mutate(self, service_call, *args):
        try:
            return self.handle_service_call(service_call, *args)
        except APIException as e:
            self.error = get_error_message(e)
            raise

    def _invalidate(self, operation):
        refreshers = {
            SUMMARY: self.load_summary,
            CATEGORIES: self.load_categories,
        }
        for resource in INVALIDATION_RULES[operation]:
            refreshers[resource]()

    def create(self, draft):
        """
        Validate and submit a new transaction, then prepend it to the cache.

        Raises:
            ValidationError: the draft failed client-side validation or the
                backend rejected it
            APIException: any other backend or transport failure
        """
        payload = self._validate_draft(draft)
        transaction = self._mutate(self.transaction_service.create_transaction, payload)
        if self.is_closed:
            return transaction

        self.transactions = [transaction] + [
            t for t in self.transactions if t.id != transaction.id
        ]
        self.error = None
        self._invalidate("create")
        return transaction

    def update(self, transaction_id, draft):
        """
        Replace a transaction with a validated draft.

        Raises:
            NotFound: the backend has no transaction with ``transaction_id``
        """
        payload = self._validate_draft(draft)
        transaction = self._mutate(
            self.transaction_service.update_transaction, transaction_id, payload
        )
        if self.is_closed:
            return transaction

        self.transactions = [
            transaction if t.id == transaction.id else t for t in self.transactions
        ]
        self.error = None
        self._invalidate("update")
        return transaction

    def delete(self, transaction_id):
        self._mutate(self.transaction_service.delete_transaction, transaction_id)
        if self.is_closed:
            return

        self.transactions = [t for t in self.transactions if t.id != transaction_id]
        self.error = None
        self._invalidate("delete")

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def clear_error(self):
        self.error = None

    def clear_transactions(self):
        self.transactions = []
        self.page = TransactionPage()

    def teardown(self):
        """Drop cached data; responses still in flight are discarded."""
        self._sequencer.close()
        self.transactions = []
        self.page = TransactionPage()
        self.recent = []
        self.summary = None
        self.categories = []
        self.query = TransactionQuery()
        self.error = None

        logger.info(
            "Transaction state torn down",
            extra={
                "action": "transaction_state_teardown",
                "component": "TransactionState",
            },
        )
