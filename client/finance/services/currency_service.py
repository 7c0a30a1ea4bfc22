"""
Service for currency conversion and exchange-rate lookups.

This module provides the CurrencyService class wrapping the backend's
``/currency`` endpoints. Rates are owned by the backend; the client only
formats them and validates conversion input before sending it.
"""

import logging

from ..models import ConversionResult
from ..utils import currency_utils
from ..utils.currency_utils import CurrencyConversionError
from ..utils.wire_utils import parse_amount, parse_timestamp

logger = logging.getLogger(__name__)


class CurrencyService:
    """
    Client-side gateway to currency conversion.

    Provides conversion, rate lookups, supported-currency listing and the
    backend rate cache introspection endpoints, plus display helpers backed
    by the lookup tables in ``finance.utils.currency_utils``.
    """

    def __init__(self, api_client):
        self.api = api_client

    @staticmethod
    def format_conversion_from_api(payload):
        payload = payload or {}
        return ConversionResult(
            converted_amount=parse_amount(payload.get("convertedAmount")),
            exchange_rate=parse_amount(payload.get("exchangeRate")),
            timestamp=parse_timestamp(payload.get("timestamp")),
            original_amount=parse_amount(payload.get("originalAmount"), default=None),
            from_currency=payload.get("fromCurrency"),
            to_currency=payload.get("toCurrency"),
            source=payload.get("source"),
        )

    def convert_currency(self, amount, from_currency, to_currency):
        """
        Convert ``amount`` between two currencies on the backend.

        Args:
            amount: Amount in ``from_currency`` (number or numeric string)
            from_currency: Source currency code (e.g., 'USD')
            to_currency: Target currency code (e.g., 'EUR')

        Returns:
            ConversionResult: converted amount, rate and rate timestamp

        Raises:
            CurrencyConversionError: If the amount cannot be parsed
            APIException: If the backend rejects the conversion or is unreachable
        """
        number = currency_utils.to_decimal(amount)
        if number is None:
            raise CurrencyConversionError(
                "Amount must be a valid number",
                from_currency=from_currency,
                to_currency=to_currency,
            )

        logger.debug(
            "Currency conversion requested",
            extra={
                "amount": str(number),
                "from_currency": from_currency,
                "to_currency": to_currency,
                "action": "currency_conversion_start",
                "component": "CurrencyService",
            },
        )

        payload = self.api.post(
            "/currency/convert",
            data={
                "amount": number,
                "fromCurrency": from_currency,
                "toCurrency": to_currency,
            },
        )
        result = self.format_conversion_from_api(payload)

        logger.info(
            "Currency conversion completed",
            extra={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "exchange_rate": str(result.exchange_rate),
                "action": "currency_conversion_completed",
                "component": "CurrencyService",
            },
        )
        return result

    def get_exchange_rate(self, from_currency, to_currency):
        payload = self.api.get(f"/currency/rate/{from_currency}/{to_currency}") or {}
        return parse_amount(payload.get("exchangeRate"))

    def get_exchange_rates(self, base_currency):
        """Rates for every supported currency against ``base_currency``."""
        payload = self.api.get(f"/currency/rates/{base_currency}") or {}
        return {
            code: parse_amount(rate) for code, rate in (payload.get("rates") or {}).items()
        }

    def get_supported_currencies(self):
        return list(self.api.get("/currency/supported") or [])

    def convert_multiple_currencies(self, amount, from_currency, to_currencies):
        payload = self.api.post(
            "/currency/convert-multiple",
            params={
                "amount": amount,
                "fromCurrency": from_currency,
                "toCurrencies": ",".join(to_currencies),
            },
        )
        return [self.format_conversion_from_api(item) for item in payload or []]

    def get_currency_info(self, currency_code):
        return self.api.get(f"/currency/info/{currency_code}") or {}

    def get_cache_status(self):
        return self.api.get("/currency/cache/status") or {}

    def clear_cache(self):
        result = self.api.delete("/currency/cache")

        logger.info(
            "Backend exchange-rate cache cleared",
            extra={
                "action": "currency_cache_cleared",
                "component": "CurrencyService",
            },
        )
        return result

    # Display helpers

    format_amount_with_currency = staticmethod(currency_utils.format_amount_with_currency)
    format_amount = staticmethod(currency_utils.format_amount)
    get_currency_name = staticmethod(currency_utils.get_currency_name)
    get_currency_flag = staticmethod(currency_utils.get_currency_flag)
    validate_currency_code = staticmethod(currency_utils.validate_currency_code)
    validate_amount = staticmethod(currency_utils.validate_amount)
