"""Coercion of date-valued seed fields."""

import datetime
from typing import Any

from storeseed.errors import InvalidValueError


def coerce_timestamp(
    value: Any,
    *,
    entity: str,
    field: str,
    key: str | None = None,
) -> datetime.datetime | None:
    """Return *value* as an aware UTC-based datetime, or ``None`` when it is empty.

    Accepts datetimes, dates, ISO-8601 strings (a trailing ``Z`` included) and
    numbers as epoch milliseconds.  Naive values are taken to be UTC.
    """
    if value is None or value == "" or value is False:
        return None

    if isinstance(value, datetime.datetime):
        result = value
    elif isinstance(value, datetime.date):
        result = datetime.datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            result = datetime.datetime.fromtimestamp(value / 1000, tz=datetime.UTC)
        except (OverflowError, OSError, ValueError):
            raise InvalidValueError(entity, field, value, key=key, reason="timestamp out of range") from None
    elif isinstance(value, str):
        try:
            result = datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidValueError(entity, field, value, key=key, reason="not an ISO-8601 date") from None
    else:
        raise InvalidValueError(entity, field, value, key=key, reason="not a date")

    if result.tzinfo is None:
        result = result.replace(tzinfo=datetime.UTC)
    return result
