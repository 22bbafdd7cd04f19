# domain/csv_export.py
"""
CSV export of the (already filtered) payments table.

Every cell is wrapped in double quotes as-is. Embedded double quotes are NOT
escaped: a value containing one produces a malformed row.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Iterable, List

from domain.models import Payment

CSV_HEADER = [
    "Full Name", "Email", "Contact", "Reference", "Amount",
    "Plan", "Status", "Created At", "Expires At",
]


def _cell(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f'"{value}"'


def payment_row(p: Payment, format_date: Callable[[Any], str]) -> List[Any]:
    return [
        p.full_name,
        p.email,
        p.contact_number,
        p.reference_number,
        p.amount,
        p.plan,
        p.status,
        format_date(p.created_at),
        format_date(p.expires_at),
    ]


def payments_to_csv(payments: Iterable[Payment], format_date: Callable[[Any], str]) -> str:
    rows = [CSV_HEADER] + [payment_row(p, format_date) for p in payments]
    return "\n".join(",".join(_cell(c) for c in row) for row in rows)


def export_filename(today: dt.date) -> str:
    return f"payments-{today.isoformat()}.csv"
