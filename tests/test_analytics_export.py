from datetime import date
from decimal import Decimal

from backend.app.services.analytics_export import CSV_HEADERS, analytics_csv_filename, build_analytics_csv


def test_csv_has_header_and_one_row_per_client():
    report = {
        "hours_per_client": [
            {
                "name": "Acme, Inc.",
                "hours": Decimal("2.00"),
                "revenue": Decimal("200.00"),
                "costs": Decimal("100.00"),
                "profit": Decimal("100.00"),
                "profit_margin": Decimal("50.00"),
                "kilometers": Decimal("12.5"),
            },
            {
                "name": "Retainer Co",
                "hours": Decimal("4.00"),
                "revenue": Decimal("1500.00"),
                "costs": Decimal("200.00"),
                "profit": Decimal("1300.00"),
                "profit_margin": Decimal("86.67"),
                "kilometers": Decimal("0.0"),
            },
        ]
    }
    lines = build_analytics_csv(report).splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '"Acme, Inc.",2.00,200.00,100.00,100.00,50.0%,12.5'
    assert lines[2] == "Retainer Co,4.00,1500.00,200.00,1300.00,86.7%,0.0"


def test_csv_with_no_clients_is_header_only():
    assert build_analytics_csv({"hours_per_client": []}) == ",".join(CSV_HEADERS) + "\n"


def test_filename_includes_period_and_date():
    assert analytics_csv_filename("month", date(2025, 3, 15)) == "analytics_month_2025-03-15.csv"
