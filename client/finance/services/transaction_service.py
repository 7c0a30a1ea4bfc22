"""
Service for transaction operations against the backend REST API.

This module provides the TransactionService class mapping client calls to
``/transactions`` endpoints and translating between the wire representation
(camelCase JSON, float amounts, ISO timestamps) and the client's
``Transaction`` snapshots.
"""

import logging
import math
from decimal import Decimal
from urllib.parse import quote

from ..models import (CategorySummary, MonthlyTrend, Summary, Transaction,
                      TransactionPage, TransactionQuery)
from ..utils.wire_utils import format_timestamp, parse_amount, parse_timestamp

logger = logging.getLogger(__name__)

# Sort keys of client-side paging, keyed by the backend's sort field names.
SORT_KEYS = {
    "transactionDate": lambda t: (t.transaction_date is None, t.transaction_date),
    "description": lambda t: (t.description or "").lower(),
    "type": lambda t: t.type or "",
    "amount": lambda t: t.amount,
    "category": lambda t: (t.category or "").lower(),
}


class TransactionService:
    """
    Client-side gateway to the backend's transaction endpoints.

    Every method returns parsed snapshots; failures propagate as the
    exceptions raised by ``ApiClient``.
    """

    def __init__(self, api_client):
        self.api = api_client

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    @staticmethod
    def format_for_api(validated_data):
        """
        Build the request body for create/update from validated draft data.

        Amount becomes a JSON number, the date a canonical UTC timestamp,
        and empty optional fields are sent as null.
        """
        return {
            "description": validated_data["description"],
            "amount": Decimal(validated_data["amount"]),
            "type": validated_data["type"],
            "transactionDate": format_timestamp(validated_data.get("transaction_date")),
            "category": validated_data.get("category") or None,
            "notes": validated_data.get("notes") or None,
        }

    @staticmethod
    def format_from_api(payload):
        """Parse one backend transaction object into a ``Transaction``."""
        return Transaction(
            id=payload.get("id"),
            description=payload.get("description"),
            amount=parse_amount(payload.get("amount")),
            type=payload.get("type"),
            transaction_date=parse_timestamp(payload.get("transactionDate")),
            category=payload.get("category"),
            notes=payload.get("notes"),
            created_at=parse_timestamp(payload.get("createdAt")),
            updated_at=parse_timestamp(payload.get("updatedAt")),
        )

    def _format_list(self, payload):
        return [self.format_from_api(item) for item in payload or []]

    @classmethod
    def format_page_from_api(cls, payload, query=None):
        """
        Parse the backend page envelope (or a bare list) into a page object.
        """
        query = query or TransactionQuery()
        if isinstance(payload, list):
            items = [cls.format_from_api(item) for item in payload]
            return TransactionPage(
                items=items,
                page=query.page,
                size=query.size,
                total_elements=len(items),
                total_pages=1 if items else 0,
            )

        payload = payload or {}
        items = [cls.format_from_api(item) for item in payload.get("content") or []]
        return TransactionPage(
            items=items,
            page=payload.get("number", query.page),
            size=payload.get("size", query.size),
            total_elements=payload.get("totalElements", len(items)),
            total_pages=payload.get("totalPages", 1 if items else 0),
        )

    @staticmethod
    def format_summary_from_api(payload):
        payload = payload or {}
        return Summary(
            total_income=parse_amount(payload.get("totalIncome")),
            total_expenses=parse_amount(payload.get("totalExpenses")),
            net_worth=parse_amount(payload.get("netWorth")),
            income_count=int(payload.get("incomeCount") or 0),
            expense_count=int(payload.get("expenseCount") or 0),
        )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create_transaction(self, transaction_data):
        """POST a formatted transaction; returns the server-assigned entity."""
        payload = self.api.post("/transactions", data=transaction_data)
        transaction = self.format_from_api(payload)

        logger.info(
            "Transaction created",
            extra={
                "transaction_id": transaction.id,
                "transaction_type": transaction.type,
                "action": "transaction_created",
                "component": "TransactionService",
            },
        )
        return transaction

    def get_all_transactions(self, page=0, size=10, sort_by="transactionDate", sort_dir="desc"):
        query = TransactionQuery(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)
        payload = self.api.get("/transactions", params=query.to_params())
        return self.format_page_from_api(payload, query)

    def get_transaction(self, transaction_id):
        return self.format_from_api(self.api.get(f"/transactions/{transaction_id}"))

    def update_transaction(self, transaction_id, transaction_data):
        """PUT a full replacement; ``NotFound`` when the id does not exist."""
        payload = self.api.put(f"/transactions/{transaction_id}", data=transaction_data)
        transaction = self.format_from_api(payload)

        logger.info(
            "Transaction updated",
            extra={
                "transaction_id": transaction_id,
                "action": "transaction_updated",
                "component": "TransactionService",
            },
        )
        return transaction

    def delete_transaction(self, transaction_id):
        self.api.delete(f"/transactions/{transaction_id}")

        logger.info(
            "Transaction deleted",
            extra={
                "transaction_id": transaction_id,
                "action": "transaction_deleted",
                "component": "TransactionService",
            },
        )

    # ------------------------------------------------------------------
    # Filtered and aggregate reads
    # ------------------------------------------------------------------

    def get_transactions_by_type(self, transaction_type):
        return self._format_list(self.api.get(f"/transactions/type/{transaction_type}"))

    def get_transactions_by_category(self, category):
        return self._format_list(self.api.get(f"/transactions/category/{quote(category, safe='')}"))

    def get_recent_transactions(self):
        return self._format_list(self.api.get("/transactions/recent"))

    def get_categories(self):
        """Distinct category labels used by the user's transactions."""
        return list(self.api.get("/transactions/categories") or [])

    def get_summary(self):
        return self.format_summary_from_api(self.api.get("/transactions/summary"))

    def get_transactions_by_date_range(self, start_date, end_date):
        params = {
            "startDate": format_timestamp(start_date),
            "endDate": format_timestamp(end_date),
        }
        return self._format_list(self.api.get("/transactions/date-range", params=params))

    def get_transactions_by_type_and_date_range(self, transaction_type, start_date, end_date):
        params = {
            "startDate": format_timestamp(start_date),
            "endDate": format_timestamp(end_date),
        }
        return self._format_list(
            self.api.get(f"/transactions/type/{transaction_type}/date-range", params=params)
        )

    def get_category_summary(self):
        return [
            CategorySummary(
                category=row.get("category"),
                total_amount=parse_amount(row.get("totalAmount")),
                transaction_count=int(row.get("transactionCount") or 0),
                income_amount=parse_amount(row.get("incomeAmount")),
                expense_amount=parse_amount(row.get("expenseAmount")),
            )
            for row in self.api.get("/transactions/analytics/category-summary") or []
        ]

    def get_monthly_trends(self, months=12):
        rows = self.api.get("/transactions/analytics/monthly-trends", params={"months": months})
        trends = [
            MonthlyTrend(
                month=row.get("month"),
                income=parse_amount(row.get("income")),
                expenses=parse_amount(row.get("expenses")),
                transaction_count=int(row.get("transactionCount") or 0),
            )
            for row in rows or []
        ]
        return sorted(trends, key=lambda trend: trend.month or "")

    # ------------------------------------------------------------------
    # Unified query
    # ------------------------------------------------------------------

    def query(self, query):
        """
        Run a ``TransactionQuery`` and return one page of results.

        Without filters the backend paginates and sorts. The filtered
        endpoints return complete lists, so filtered results are narrowed,
        sorted and sliced here; two filters use the category endpoint and
        narrow by type locally.
        """
        if not query.is_filtered:
            return self.get_all_transactions(
                page=query.page, size=query.size, sort_by=query.sort_by, sort_dir=query.sort_dir
            )

        if query.category:
            transactions = self.get_transactions_by_category(query.category)
            if query.type:
                transactions = [t for t in transactions if t.type == query.type]
        else:
            transactions = self.get_transactions_by_type(query.type)

        logger.debug(
            "Filtered transaction query resolved",
            extra={
                "filter_type": query.type,
                "filter_category": query.category,
                "matched_count": len(transactions),
                "action": "transaction_query_filtered",
                "component": "TransactionService",
            },
        )
        return paginate(transactions, query)


def paginate(transactions, query):
    """Sort and slice a complete list according to ``query``."""
    ordered = sorted(
        transactions,
        key=SORT_KEYS[query.sort_by],
        reverse=query.sort_dir == "desc",
    )
    start = query.page * query.size
    return TransactionPage(
        items=ordered[start:start + query.size],
        page=query.page,
        size=query.size,
        total_elements=len(ordered),
        total_pages=math.ceil(len(ordered) / query.size) if ordered else 0,
    )


def format_amount(amount):
    """Display an amount in the app's display currency, e.g. ``$1,234.50``."""
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value):
    """Display a date as ``Jan 05, 2024``; empty string for None."""
    if not value:
        return ""
    return value.strftime("%b %d, %Y")


def format_datetime(value):
    """Display a timestamp as ``Jan 05, 2024 02:30 PM``."""
    if not value:
        return ""
    return value.strftime("%b %d, %Y %I:%M %p")
