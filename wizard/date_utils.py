"""Date helper utilities shared by the validators and the document mapper."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

_FULL_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_PARTIAL_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def normalize_iso_date(value: Any) -> str | None:
    """Return ``value`` as ``YYYY-MM-DD`` or ``None`` when it is not a date.

    Month values (``YYYY-MM``) are expanded to the first day of the month and
    ISO timestamps are truncated to their date part.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    if not candidate:
        return None
    if _FULL_DATE_RE.match(candidate):
        try:
            return date.fromisoformat(candidate).isoformat()
        except ValueError:
            return None
    partial = _PARTIAL_DATE_RE.match(candidate)
    if partial:
        year, month = partial.groups()
        try:
            return date(int(year), int(month), 1).isoformat()
        except ValueError:
            return None
    try:
        return datetime.fromisoformat(candidate).date().isoformat()
    except ValueError:
        return None


def to_partial_date(value: Any) -> str | None:
    """Return ``value`` reduced to ``YYYY-MM`` or ``None`` when it is not a date."""

    normalized = normalize_iso_date(value)
    if normalized is None:
        return None
    return normalized[:7]


def format_payload_date(value: Any, *, granularity: str = "day") -> str | None:
    """Render ``value`` at the granularity the backend expects."""

    if granularity == "month":
        return to_partial_date(value)
    return normalize_iso_date(value)


def is_valid_date_value(value: Any) -> bool:
    """Return ``True`` when ``value`` can be read as a calendar date."""

    return normalize_iso_date(value) is not None


__all__ = [
    "format_payload_date",
    "is_valid_date_value",
    "normalize_iso_date",
    "to_partial_date",
]
