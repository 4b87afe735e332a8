"""Receipt list normalization and search/dropdown filtering."""

from __future__ import annotations

from datetime import date

import pytest

from receiptdesk.domain.receipts.filters import (
    MONTH_OPTIONS,
    ReceiptFilter,
    filter_receipts,
    format_currency,
    load_receipts,
    normalize_total,
    year_options,
)

ROWS = [
    {
        "id": 1,
        "receiptNumber": "REC-0001",
        "date": "2026-01-05",
        "customerName": "Ravi Kumar",
        "total": "₹1,234.50",
        "paymentStatus": "full",
        "displayStatus": "full",
    },
    {
        "id": 2,
        "receiptNumber": "REC-0002",
        "date": "2026-02-11T10:30:00Z",
        "customerName": "Sunita Devi",
        "total": 500,
        "paymentStatus": "advance",
        "displayStatus": "advance",
    },
    {
        "id": "3",
        "receiptNumber": "REC-0003",
        "date": "2025-02-20",
        "customerName": "Arjun Mehta",
        "total": "n/a",
        "paymentStatus": "due",
        "displayStatus": "due_paid",
    },
    {
        "id": 4,
        "receiptNumber": "REC-0004",
        "date": "not a date",
        "customerName": None,
        "total": 75.25,
        "paymentStatus": "due",
        "displayStatus": "due",
    },
]


@pytest.fixture
def receipts():
    return load_receipts(ROWS)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("₹1,234.50", 1234.5),
        ("1,000", 1000.0),
        ("-12.5", -12.5),
        ("n/a", 0.0),
        ("", 0.0),
        (99, 99.0),
        (None, 0.0),
    ],
)
def test_normalize_total(raw, expected) -> None:
    assert normalize_total(raw) == expected


def test_totals_are_normalized_on_load(receipts) -> None:
    assert [receipt.total for receipt in receipts] == [1234.5, 500.0, 0.0, 75.25]


def _ids(receipts) -> list:
    return [str(receipt.id) for receipt in receipts]


def test_search_matches_formatted_total(receipts) -> None:
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="1234"))) == ["1"]


def test_search_is_case_insensitive_across_fields(receipts) -> None:
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="  sunita "))) == ["2"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="rec-000"))) == ["1", "2", "3", "4"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="DUE_PAID"))) == ["3"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="500"))) == ["2"]


def test_empty_filter_keeps_everything(receipts) -> None:
    assert len(filter_receipts(receipts, ReceiptFilter())) == 4


def test_status_year_and_month_are_combined(receipts) -> None:
    assert _ids(filter_receipts(receipts, ReceiptFilter(status="due_paid"))) == ["3"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(year="2026"))) == ["1", "2"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(month="02"))) == ["2", "3"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(year="2026", month="02"))) == ["2"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="ravi", month="02"))) == []


def test_unparseable_date_never_matches_concrete_period(receipts) -> None:
    matched = _ids(filter_receipts(receipts, ReceiptFilter(status="due")))
    assert matched == ["4"]
    assert _ids(filter_receipts(receipts, ReceiptFilter(status="due", year="2026"))) == []


def test_dropdown_options() -> None:
    assert year_options(date(2026, 10, 18)) == ["2026", "2025", "2024", "2023", "2022"]
    assert MONTH_OPTIONS[0] == "01" and MONTH_OPTIONS[-1] == "12"


def test_format_currency() -> None:
    assert format_currency(1234.5) == "1234.50"
    assert format_currency("₹ 80") == "80.00"
    assert format_currency("abc") == "0.00"


def test_status_label(receipts) -> None:
    assert [receipt.status_label for receipt in receipts] == [
        "Full payment",
        "Advance payment",
        "Due Paid",
        "Due payment",
    ]


def test_rows_missing_id_or_receipt_number_still_load() -> None:
    receipts = load_receipts(
        [
            {"receiptNumber": None, "date": "2026-03-01", "customerName": "Walk-in", "total": "₹40"},
            {"id": 9, "date": "2026-03-02", "customerName": "Leela", "total": 60, "displayStatus": "full"},
        ]
    )

    assert receipts[0].id is None
    assert receipts[0].receipt_number == ""
    assert receipts[1].receipt_number == ""
    assert _ids(filter_receipts(receipts, ReceiptFilter(search="walk"))) == ["None"]
    assert len(filter_receipts(receipts, ReceiptFilter(month="03"))) == 2
