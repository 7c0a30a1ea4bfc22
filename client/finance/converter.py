"""
Currency conversion preview used by the enhanced transaction form.
"""

import logging
from decimal import Decimal

from django.utils import timezone
from rest_framework.exceptions import APIException

from .exceptions import get_error_message
from .mixins import ServiceExceptionHandlerMixin
from .models import ConversionResult
from .serializers import ConversionRequestSerializer
from .utils.currency_utils import to_decimal, validate_amount

logger = logging.getLogger(__name__)


class CurrencyConverter(ServiceExceptionHandlerMixin):
    """
    Holds the outcome of the last conversion request.

    A failed conversion leaves ``error`` set and ``result`` in the neutral
    zero state. Nothing is retried.
    """

    def __init__(self, currency_service, session=None):
        self.currency_service = currency_service
        self.session = session
        self.result = ConversionResult.neutral()
        self.error = None

    def _fail(self, message, from_currency, to_currency):
        self.error = message
        self.result = ConversionResult.neutral()

        logger.warning(
            "Currency conversion failed",
            extra={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "error_message": message,
                "action": "currency_conversion_failed",
                "component": "CurrencyConverter",
                "severity": "low",
            },
        )
        return None

    def convert(self, amount, from_currency, to_currency):
        """
        Convert ``amount`` and remember the outcome.

        Identical currencies convert locally at rate 1 without a backend call.

        Returns:
            ConversionResult on success, None on failure (see ``error``)
        """
        self.error = None

        if from_currency == to_currency:
            # Identical currencies only require a positive amount.
            number = to_decimal(amount)
            if number is None or number <= 0:
                return self._fail(validate_amount(amount), from_currency, to_currency)
            self.result = ConversionResult(
                converted_amount=number,
                exchange_rate=Decimal("1"),
                timestamp=timezone.now(),
                original_amount=number,
                from_currency=from_currency,
                to_currency=to_currency,
            )
            return self.result

        serializer = ConversionRequestSerializer(
            data={"amount": amount, "from_currency": from_currency, "to_currency": to_currency}
        )
        if not serializer.is_valid():
            return self._fail(serializer.first_error, from_currency, to_currency)
        request = serializer.validated_data

        try:
            self.result = self.handle_service_call(
                self.currency_service.convert_currency,
                request["amount"],
                request["from_currency"],
                request["to_currency"],
            )
        except APIException as e:
            return self._fail(get_error_message(e), from_currency, to_currency)
        return self.result

    def merge_into(self, draft):
        """
        Copy of ``draft`` carrying the converted amount and target currency.

        The draft is returned unchanged (as a copy) when there is no
        successful conversion to apply.
        """
        merged = dict(draft)
        if self.result.is_neutral or not self.result.to_currency:
            return merged
        merged["amount"] = self.result.converted_amount
        merged["currency"] = self.result.to_currency
        return merged

    def reset(self):
        self.result = ConversionResult.neutral()
        self.error = None
