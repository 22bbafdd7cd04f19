import datetime as dt

from domain.csv_export import CSV_HEADER, export_filename, payments_to_csv
from domain.models import project_payment
from domain.timestamps import format_date


def _fmt(value):
    return format_date(value, tz="UTC")


def test_header_only_for_empty_list():
    out = payments_to_csv([], _fmt)
    assert out == ",".join(f'"{h}"' for h in CSV_HEADER)


def test_row_values_are_quoted_in_column_order():
    p = project_payment("p1", {
        "fullName": "Jane Doe",
        "email": "jane@example.com",
        "contactNumber": "0917",
        "referenceNumber": "REF-001",
        "amount": 500,
        "plan": "Monthly",
        "status": "approved",
        "createdAt": "2025-01-05T00:00:00Z",
    })
    lines = payments_to_csv([p], _fmt).split("\n")
    assert len(lines) == 2
    assert lines[1] == (
        '"Jane Doe","jane@example.com","0917","REF-001","500","Monthly","approved","Jan 5, 2025","N/A"'
    )


def test_whole_float_amount_has_no_decimal_point():
    p = project_payment("p", {"amount": "750.0"})
    assert '"750"' in payments_to_csv([p], _fmt).split("\n")[1]


def test_export_filename():
    assert export_filename(dt.date(2025, 3, 9)) == "payments-2025-03-09.csv"
