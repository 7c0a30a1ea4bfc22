# finance/tests/unit/test_serializers.py
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.utils import timezone

from finance.models import TransactionQuery
from finance.serializers import (ConversionRequestSerializer,
                                 EnhancedTransactionDraftSerializer,
                                 TransactionDraftSerializer,
                                 TransactionQuerySerializer)

from ..factories import valid_draft


class TestTransactionDraftSerializer:
    """Tests for client-side transaction draft validation"""

    def test_valid_draft(self):
        serializer = TransactionDraftSerializer(data=valid_draft())

        assert serializer.is_valid(), serializer.errors
        data = serializer.validated_data
        assert data["amount"] == Decimal("4.50")
        assert data["transaction_date"] < timezone.now()
        assert data["category"] == "Food & Dining"

    def test_camel_case_date_key_accepted(self):
        draft = valid_draft()
        assert "transactionDate" in draft
        serializer = TransactionDraftSerializer(data=draft)
        assert serializer.is_valid()

    def test_snake_case_date_key_accepted(self):
        draft = valid_draft()
        draft["transaction_date"] = draft.pop("transactionDate")
        assert TransactionDraftSerializer(data=draft).is_valid()

    def test_numeric_string_amount_coerced(self):
        serializer = TransactionDraftSerializer(data=valid_draft(amount="4.50"))
        assert serializer.is_valid()
        assert serializer.validated_data["amount"] == Decimal("4.5")

    @pytest.mark.parametrize("amount", [0, -10, "0", "-0.01"])
    def test_non_positive_amount_rejected(self, amount):
        serializer = TransactionDraftSerializer(data=valid_draft(amount=amount))

        assert not serializer.is_valid()
        assert serializer.field_errors["amount"] == "Amount must be a positive number"

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity"])
    def test_non_numeric_amount_rejected(self, amount):
        serializer = TransactionDraftSerializer(data=valid_draft(amount=amount))
        assert not serializer.is_valid()
        assert "amount" in serializer.field_errors

    def test_amount_beyond_float_range_rejected(self):
        serializer = TransactionDraftSerializer(data=valid_draft(amount="1e400"))

        assert not serializer.is_valid()
        assert serializer.field_errors["amount"] == "Amount must be a positive number"

    def test_missing_amount(self):
        draft = valid_draft()
        del draft["amount"]
        serializer = TransactionDraftSerializer(data=draft)
        assert not serializer.is_valid()
        assert serializer.field_errors["amount"] == "Amount is required"

    def test_blank_description_after_trim(self):
        serializer = TransactionDraftSerializer(data=valid_draft(description="   "))
        assert not serializer.is_valid()
        assert serializer.field_errors["description"] == "Description is required"

    def test_description_is_trimmed(self):
        serializer = TransactionDraftSerializer(data=valid_draft(description="  Coffee  "))
        assert serializer.is_valid()
        assert serializer.validated_data["description"] == "Coffee"

    def test_length_limits(self):
        serializer = TransactionDraftSerializer(
            data=valid_draft(description="x" * 256, category="c" * 101, notes="n" * 501)
        )

        assert not serializer.is_valid()
        assert set(serializer.field_errors) == {"description", "category", "notes"}

    def test_length_limits_inclusive(self):
        serializer = TransactionDraftSerializer(
            data=valid_draft(description="x" * 255, category="c" * 100, notes="n" * 500)
        )
        assert serializer.is_valid(), serializer.errors

    def test_invalid_type(self):
        serializer = TransactionDraftSerializer(data=valid_draft(type="TRANSFER"))
        assert not serializer.is_valid()
        assert serializer.field_errors["type"] == "Transaction type must be INCOME or EXPENSE"

    def test_future_date_rejected(self):
        future = timezone.now() + timedelta(seconds=1)
        serializer = TransactionDraftSerializer(data=valid_draft(transactionDate=future))

        assert not serializer.is_valid()
        assert serializer.field_errors["transaction_date"] == "Transaction date cannot be in the future"

    def test_date_exactly_now_accepted(self):
        now = timezone.now()
        with patch("finance.serializers.timezone.now", return_value=now):
            serializer = TransactionDraftSerializer(data=valid_draft(transactionDate=now))
            assert serializer.is_valid(), serializer.errors

    def test_missing_date(self):
        draft = valid_draft()
        del draft["transactionDate"]
        serializer = TransactionDraftSerializer(data=draft)
        assert not serializer.is_valid()
        assert serializer.field_errors["transaction_date"] == "Transaction date is required"

    def test_all_errors_reported_at_once(self):
        serializer = TransactionDraftSerializer(
            data={"description": "", "amount": 0, "type": "X", "transactionDate": "nope"}
        )

        assert not serializer.is_valid()
        assert set(serializer.field_errors) == {
            "description",
            "amount",
            "type",
            "transaction_date",
        }

    def test_optional_fields_may_be_missing_or_null(self):
        draft = valid_draft(notes=None)
        del draft["category"]
        assert TransactionDraftSerializer(data=draft).is_valid()


class TestEnhancedTransactionDraftSerializer:
    def test_category_required(self):
        serializer = EnhancedTransactionDraftSerializer(data=valid_draft(category=""))
        assert not serializer.is_valid()
        assert serializer.field_errors["category"] == "Please select a category"

    def test_category_missing(self):
        draft = valid_draft()
        del draft["category"]
        serializer = EnhancedTransactionDraftSerializer(data=draft)
        assert not serializer.is_valid()
        assert serializer.field_errors["category"] == "Please select a category"

    def test_currency_must_be_supported(self):
        serializer = EnhancedTransactionDraftSerializer(data=valid_draft(currency="XYZ"))
        assert not serializer.is_valid()
        assert serializer.field_errors["currency"] == "Unsupported currency code"

    def test_valid_with_currency(self):
        serializer = EnhancedTransactionDraftSerializer(data=valid_draft(currency="EUR"))
        assert serializer.is_valid(), serializer.errors


class TestTransactionQuerySerializer:
    """Tests for list query validation"""

    def test_defaults(self):
        serializer = TransactionQuerySerializer(data={})
        assert serializer.is_valid()
        assert serializer.to_query() == TransactionQuery()

    def test_full_query(self):
        serializer = TransactionQuerySerializer(
            data={
                "page": 2,
                "size": 5,
                "sort_by": "amount",
                "sort_dir": "asc",
                "type": "INCOME",
                "category": "Salary",
            }
        )
        assert serializer.is_valid()
        assert serializer.to_query() == TransactionQuery(
            page=2, size=5, sort_by="amount", sort_dir="asc", type="INCOME", category="Salary"
        )

    def test_blank_filters_become_none(self):
        serializer = TransactionQuerySerializer(data={"type": None, "category": ""})
        assert serializer.is_valid()
        query = serializer.to_query()
        assert query.type is None and query.category is None
        assert not query.is_filtered

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"page": -1}, "page"),
            ({"size": 0}, "size"),
            ({"sort_by": "notes"}, "sort_by"),
            ({"sort_dir": "up"}, "sort_dir"),
            ({"type": "TRANSFER"}, "type"),
        ],
    )
    def test_invalid_values(self, data, field):
        serializer = TransactionQuerySerializer(data=data)
        assert not serializer.is_valid()
        assert field in serializer.errors


class TestConversionRequestSerializer:
    def test_codes_uppercased(self):
        serializer = ConversionRequestSerializer(
            data={"amount": "100", "from_currency": "usd", "to_currency": "eur"}
        )
        assert serializer.is_valid()
        assert serializer.validated_data["from_currency"] == "USD"
        assert serializer.validated_data["to_currency"] == "EUR"

    def test_rejects_unsupported_code_and_zero_amount(self):
        serializer = ConversionRequestSerializer(
            data={"amount": "0", "from_currency": "USD", "to_currency": "XYZ"}
        )
        assert not serializer.is_valid()
        assert set(serializer.errors) == {"amount", "to_currency"}

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"amount": "abc", "from_currency": "USD", "to_currency": "EUR"}, "Amount must be a valid number"),
            ({"amount": 10**10, "from_currency": "USD", "to_currency": "EUR"}, "Amount is too large"),
            ({"amount": "5", "from_currency": "US", "to_currency": "EUR"}, "Currency code must be 3 characters long"),
            ({"amount": "5", "from_currency": "USD", "to_currency": "XYZ"}, "Unsupported currency code"),
        ],
    )
    def test_first_error(self, data, message):
        serializer = ConversionRequestSerializer(data=data)

        assert not serializer.is_valid()
        assert serializer.first_error == message
