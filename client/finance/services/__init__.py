# finance/services/__init__.py
from .category_service import CategoryService
from .currency_service import CurrencyService
from .transaction_service import TransactionService

__all__ = [
    "CategoryService",
    "CurrencyService",
    "TransactionService",
]
