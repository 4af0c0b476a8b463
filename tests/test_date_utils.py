from __future__ import annotations

from datetime import date, datetime

import pytest

from wizard.date_utils import format_payload_date, is_valid_date_value, normalize_iso_date, to_partial_date


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-05-17", "2024-05-17"),
        ("2024-05", "2024-05-01"),
        ("2024-5", "2024-05-01"),
        (" 2024-05 ", "2024-05-01"),
        ("2024-05-17T09:30:00", "2024-05-17"),
        (date(2024, 5, 17), "2024-05-17"),
        (datetime(2024, 5, 17, 9, 30), "2024-05-17"),
        ("2024-13", None),
        ("2024-02-30", None),
        ("yesterday", None),
        ("", None),
        (None, None),
        (20240517, None),
    ],
)
def test_normalize_iso_date(value: object, expected: str | None) -> None:
    assert normalize_iso_date(value) == expected


def test_partial_and_payload_dates() -> None:
    assert to_partial_date("2024-05-17") == "2024-05"
    assert to_partial_date("junk") is None
    assert format_payload_date("2024-05", granularity="day") == "2024-05-01"
    assert format_payload_date("2024-05-17", granularity="month") == "2024-05"
    assert format_payload_date(None) is None


def test_is_valid_date_value() -> None:
    assert is_valid_date_value("2024-05")
    assert not is_valid_date_value("05/2024")
