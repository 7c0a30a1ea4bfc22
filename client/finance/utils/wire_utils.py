"""
Conversions between the backend's JSON representation and Python values.
"""

import datetime
from decimal import Decimal

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers

from .currency_utils import to_decimal

_timestamp_field = serializers.DateTimeField()


def parse_timestamp(value):
    """
    Parse a backend timestamp into an aware datetime.

    The backend sends local date-times without an offset; they are read in
    the client's default time zone (UTC). Unparseable values become None.
    """
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    else:
        parsed = parse_datetime(str(value))
        if parsed is None:
            return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_default_timezone())
    return parsed


def format_timestamp(value):
    """Canonical ISO-8601 UTC string (``...Z``) for a datetime, or None."""
    if value is None:
        return None
    return _timestamp_field.to_representation(value)


def parse_amount(value, default=Decimal("0")):
    """Read a JSON number as a Decimal without float artefacts."""
    number = to_decimal(value)
    return default if number is None else number
