"""
Value snapshots of backend-owned finance data.

The backend is authoritative for every entity below. The client holds these
objects as a best-effort mirror and replaces them by reloading after
mutations; nothing here is persisted locally.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from .constants import (DEFAULT_CATEGORY_COLOR, DEFAULT_PAGE_SIZE,
                        DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD, INCOME)


@dataclass
class Transaction:
    """A single income or expense entry owned by the session's user."""

    id: int
    description: str
    amount: Decimal
    type: str
    transaction_date: Optional[datetime] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_income(self):
        return self.type == INCOME

    @property
    def signed_amount(self):
        """Amount with sign for net calculations."""
        return self.amount if self.type == INCOME else -self.amount


@dataclass
class Category:
    """System-provided (default) or user-created category."""

    id: int
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_CATEGORY_COLOR
    is_default: bool = False
    transaction_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Summary:
    """Server-side aggregate over all of the user's transactions."""

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_worth: Decimal = Decimal("0")
    income_count: int = 0
    expense_count: int = 0

    def count_for(self, transaction_type):
        return self.income_count if transaction_type == INCOME else self.expense_count


@dataclass
class ConversionResult:
    """Ephemeral outcome of a currency conversion preview."""

    converted_amount: Decimal
    exchange_rate: Decimal
    timestamp: Optional[datetime]
    original_amount: Optional[Decimal] = None
    from_currency: Optional[str] = None
    to_currency: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def neutral(cls):
        """Zero state shown after a failed conversion."""
        return cls(
            converted_amount=Decimal("0"),
            exchange_rate=Decimal("0"),
            timestamp=None,
        )

    @property
    def is_neutral(self):
        return self.converted_amount == 0 and self.exchange_rate == 0


@dataclass
class CategorySummary:
    category: str
    total_amount: Decimal
    transaction_count: int
    income_amount: Decimal
    expense_amount: Decimal


@dataclass
class MonthlyTrend:
    month: str
    income: Decimal
    expenses: Decimal
    transaction_count: int

    @property
    def net(self):
        return self.income - self.expenses


@dataclass
class TransactionPage:
    """One page of transactions together with paging metadata."""

    items: List[Transaction] = field(default_factory=list)
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    total_elements: int = 0
    total_pages: int = 0


@dataclass(frozen=True)
class TransactionQuery:
    """
    Single description of what the transaction list shows.

    Pagination, sorting and the optional type/category filters live in one
    object so that filters always compose with each other and with paging.
    """

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_FIELD
    sort_dir: str = DEFAULT_SORT_DIRECTION
    type: Optional[str] = None
    category: Optional[str] = None

    @property
    def is_filtered(self):
        return bool(self.type or self.category)

    def to_params(self):
        """Query-string parameters of the backend's paginated list endpoint."""
        return {
            "page": self.page,
            "size": self.size,
            "sortBy": self.sort_by,
            "sortDir": self.sort_dir,
        }
