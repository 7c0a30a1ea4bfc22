"""
Client-side validation of transaction drafts, list queries and
conversion requests.

Every rule is pure and synchronous: nothing here calls the backend.
DRF collects errors for all fields at once, so a form can show every
problem in a single pass instead of stopping at the first one.
"""

import logging
import math

from django.utils import timezone
from rest_framework import serializers

from .constants import (CATEGORY_MAX_LENGTH, DEFAULT_PAGE_SIZE,
                        DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD,
                        DESCRIPTION_MAX_LENGTH, NOTES_MAX_LENGTH,
                        SORT_DIRECTIONS, SORT_FIELDS,
                        TRANSACTION_TYPE_CHOICES)
from .models import TransactionQuery
from .utils import currency_utils
from .utils.currency_utils import SUPPORTED_CURRENCIES

logger = logging.getLogger(__name__)

# Draft keys as produced by forms and by the backend's camelCase payloads.
DRAFT_FIELD_ALIASES = {
    "transactionDate": "transaction_date",
}


def normalize_draft_keys(draft):
    """Return a copy of ``draft`` with camelCase keys mapped to field names."""
    return {DRAFT_FIELD_ALIASES.get(key, key): value for key, value in draft.items()}


def first_errors(errors):
    """First error message per field of a serializer ``errors`` mapping."""
    return {field: str(messages[0]) for field, messages in errors.items() if messages}


# -------------------------------------------------------------------
# TRANSACTION DRAFT SERIALIZER
# -------------------------------------------------------------------


class TransactionDraftSerializer(serializers.Serializer):
    """
    Validates a user-entered transaction before it is submitted.

    Rules:
    - description: required, 1-255 characters after trimming
    - amount: required, finite number greater than zero
    - type: INCOME or EXPENSE
    - transaction_date: required, not later than the moment of validation
    - category: optional, at most 100 characters
    - notes: optional, at most 500 characters

    On success ``validated_data`` holds the amount as a Decimal and the date
    as an aware datetime.
    """

    description = serializers.CharField(
        max_length=DESCRIPTION_MAX_LENGTH,
        trim_whitespace=True,
        error_messages={
            "required": "Description is required",
            "blank": "Description is required",
            "null": "Description is required",
            "max_length": f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
        },
    )
    amount = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        error_messages={
            "required": "Amount is required",
            "null": "Amount is required",
            "invalid": "Amount must be a positive number",
        },
    )
    type = serializers.ChoiceField(
        choices=TRANSACTION_TYPE_CHOICES,
        error_messages={
            "required": "Transaction type is required",
            "null": "Transaction type is required",
            "invalid_choice": "Transaction type must be INCOME or EXPENSE",
        },
    )
    transaction_date = serializers.DateTimeField(
        error_messages={
            "required": "Transaction date is required",
            "null": "Transaction date is required",
            "invalid": "Transaction date is not a valid date",
        },
    )
    category = serializers.CharField(
        max_length=CATEGORY_MAX_LENGTH,
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={
            "max_length": f"Category must not exceed {CATEGORY_MAX_LENGTH} characters",
        },
    )
    notes = serializers.CharField(
        max_length=NOTES_MAX_LENGTH,
        required=False,
        allow_blank=True,
        allow_null=True,
        trim_whitespace=False,
        error_messages={
            "max_length": f"Notes must not exceed {NOTES_MAX_LENGTH} characters",
        },
    )

    def to_internal_value(self, data):
        if hasattr(data, "items"):
            data = normalize_draft_keys(data)
        return super().to_internal_value(data)

    def validate_amount(self, value):
        # Decimals beyond the float range would be encoded as Infinity.
        if value <= 0 or not math.isfinite(float(value)):
            raise serializers.ValidationError("Amount must be a positive number")
        return value

    def validate_transaction_date(self, value):
        # Exactly "now" is accepted; only strictly later instants fail.
        if value > timezone.now():
            logger.debug(
                "Future transaction date rejected",
                extra={
                    "transaction_date": value.isoformat(),
                    "action": "transaction_date_validation_failed",
                    "component": "TransactionDraftSerializer",
                },
            )
            raise serializers.ValidationError("Transaction date cannot be in the future")
        return value

    @property
    def field_errors(self):
        """First error message per field, as shown next to form inputs."""
        return first_errors(self.errors)


class EnhancedTransactionDraftSerializer(TransactionDraftSerializer):
    """Draft rules of the enhanced form: a category must be chosen."""

    currency = serializers.ChoiceField(
        choices=SUPPORTED_CURRENCIES,
        required=False,
        error_messages={"invalid_choice": "Unsupported currency code"},
    )

    def validate_category(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("Please select a category")
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        # validate_category only runs for fields present in the input.
        if not attrs.get("category"):
            raise serializers.ValidationError({"category": "Please select a category"})
        return attrs


# -------------------------------------------------------------------
# TRANSACTION QUERY SERIALIZER
# -------------------------------------------------------------------


class TransactionQuerySerializer(serializers.Serializer):
    """Validates pagination, sorting and filters of a list query."""

    page = serializers.IntegerField(
        min_value=0,
        default=0,
        error_messages={"min_value": "Page must be 0 or greater"},
    )
    size = serializers.IntegerField(
        min_value=1,
        default=DEFAULT_PAGE_SIZE,
        error_messages={"min_value": "Page size must be greater than 0"},
    )
    sort_by = serializers.ChoiceField(
        choices=SORT_FIELDS,
        default=DEFAULT_SORT_FIELD,
        error_messages={
            "invalid_choice": f"Sort field must be one of: {', '.join(SORT_FIELDS)}"
        },
    )
    sort_dir = serializers.ChoiceField(
        choices=SORT_DIRECTIONS,
        default=DEFAULT_SORT_DIRECTION,
        error_messages={"invalid_choice": "Sort direction must be asc or desc"},
    )
    type = serializers.ChoiceField(
        choices=TRANSACTION_TYPE_CHOICES, required=False, allow_null=True
    )
    category = serializers.CharField(
        max_length=CATEGORY_MAX_LENGTH, required=False, allow_null=True, allow_blank=True
    )

    def to_query(self):
        """Build the immutable query object from validated data."""
        data = dict(self.validated_data)
        data["category"] = data.get("category") or None
        data["type"] = data.get("type") or None
        return TransactionQuery(**data)


# -------------------------------------------------------------------
# CURRENCY CONVERSION REQUEST SERIALIZER
# -------------------------------------------------------------------


class ConversionRequestSerializer(serializers.Serializer):
    """
    Validates a conversion request before it reaches the backend.

    Field rules and messages come from ``finance.utils.currency_utils``.
    """

    amount = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        error_messages={
            "required": "Amount must be a valid number",
            "null": "Amount must be a valid number",
            "invalid": "Amount must be a valid number",
        },
    )
    from_currency = serializers.CharField(allow_blank=True)
    to_currency = serializers.CharField(allow_blank=True)

    def validate_amount(self, value):
        amount_error = currency_utils.validate_amount(value)
        if amount_error:
            raise serializers.ValidationError(amount_error)
        return value

    def _validate_code(self, value):
        code_error = currency_utils.validate_currency_code(value)
        if code_error:
            raise serializers.ValidationError(code_error)
        return value.upper()

    def validate_from_currency(self, value):
        return self._validate_code(value)

    def validate_to_currency(self, value):
        return self._validate_code(value)

    @property
    def first_error(self):
        """First message in field order, or None when valid."""
        return next(iter(first_errors(self.errors).values()), None)
