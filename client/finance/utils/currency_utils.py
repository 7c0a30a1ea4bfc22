"""
Currency lookup tables and display helpers.

This module provides the supported-currency tables (symbols, names, flags),
amount formatting and client-side validation of conversion input, with
structured logging on validation failures.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

logger = logging.getLogger(__name__)

MAX_CONVERSION_AMOUNT = Decimal("999999999")

SUPPORTED_CURRENCIES = [
    "USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "SEK", "NZD",
    "MXN", "SGD", "HKD", "NOK", "TRY", "RUB", "INR", "BRL", "ZAR", "KRW",
]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "¥",
    "SEK": "kr",
    "NZD": "NZ$",
    "MXN": "$",
    "SGD": "S$",
    "HKD": "HK$",
    "NOK": "kr",
    "TRY": "₺",
    "RUB": "₽",
    "INR": "₹",
    "BRL": "R$",
    "ZAR": "R",
    "KRW": "₩",
}

CURRENCY_NAMES = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "GBP": "British Pound",
    "JPY": "Japanese Yen",
    "CAD": "Canadian Dollar",
    "AUD": "Australian Dollar",
    "CHF": "Swiss Franc",
    "CNY": "Chinese Yuan",
    "SEK": "Swedish Krona",
    "NZD": "New Zealand Dollar",
    "MXN": "Mexican Peso",
    "SGD": "Singapore Dollar",
    "HKD": "Hong Kong Dollar",
    "NOK": "Norwegian Krone",
    "TRY": "Turkish Lira",
    "RUB": "Russian Ruble",
    "INR": "Indian Rupee",
    "BRL": "Brazilian Real",
    "ZAR": "South African Rand",
    "KRW": "South Korean Won",
}

CURRENCY_FLAGS = {
    "USD": "🇺🇸",
    "EUR": "🇪🇺",
    "GBP": "🇬🇧",
    "JPY": "🇯🇵",
    "CAD": "🇨🇦",
    "AUD": "🇦🇺",
    "CHF": "🇨🇭",
    "CNY": "🇨🇳",
    "SEK": "🇸🇪",
    "NZD": "🇳🇿",
    "MXN": "🇲🇽",
    "SGD": "🇸🇬",
    "HKD": "🇭🇰",
    "NOK": "🇳🇴",
    "TRY": "🇹🇷",
    "RUB": "🇷🇺",
    "INR": "🇮🇳",
    "BRL": "🇧🇷",
    "ZAR": "🇿🇦",
    "KRW": "🇰🇷",
}

DEFAULT_FLAG = "🏳️"


class CurrencyConversionError(Exception):
    """Custom exception for currency conversion failures."""

    def __init__(self, message: str, from_currency: str = None, to_currency: str = None):
        self.message = message
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(self.message)


def to_decimal(value) -> Optional[Decimal]:
    """Parse a number-like value into a finite Decimal, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def format_amount(amount, decimals: int = 2) -> str:
    """Format an amount with a fixed number of decimals (half-up)."""
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_amount_with_currency(amount, currency_code: str) -> str:
    """Prefix a two-decimal amount with the currency's symbol (or its code)."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol}{format_amount(amount)}"


def get_currency_name(currency_code: str) -> str:
    return CURRENCY_NAMES.get(currency_code, f"{currency_code} Currency")


def get_currency_flag(currency_code: str) -> str:
    return CURRENCY_FLAGS.get(currency_code, DEFAULT_FLAG)


def validate_currency_code(currency_code: Optional[str]) -> Optional[str]:
    """
    Validate a currency code against the supported list.

    Returns:
        Error message, or None when the code is valid.
    """
    if not currency_code or len(currency_code) != 3:
        return "Currency code must be 3 characters long"

    if currency_code.upper() not in SUPPORTED_CURRENCIES:
        logger.debug(
            "Unsupported currency code",
            extra={
                "currency": currency_code,
                "action": "currency_code_validation_failed",
                "component": "validate_currency_code",
            },
        )
        return "Unsupported currency code"

    return None


def validate_amount(amount) -> Optional[str]:
    """
    Validate an amount to convert.

    Returns:
        Error message, or None when the amount is valid.
    """
    number = to_decimal(amount)

    if number is None:
        return "Amount must be a valid number"

    if number <= 0:
        return "Amount must be greater than 0"

    if number > MAX_CONVERSION_AMOUNT:
        return "Amount is too large"

    return None
