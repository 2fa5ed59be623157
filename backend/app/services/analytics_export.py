"""CSV export of per-client analytics."""

import csv
import io
from datetime import date

CSV_HEADERS = ["Client", "Hours", "Revenue", "Costs", "Profit", "Profit Margin", "Transport (km)"]


def build_analytics_csv(report: dict) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for client in report.get("hours_per_client", []):
        writer.writerow(
            [
                client["name"],
                f"{client['hours']:.2f}",
                f"{client['revenue']:.2f}",
                f"{client['costs']:.2f}",
                f"{client['profit']:.2f}",
                f"{client['profit_margin']:.1f}%",
                f"{client['kilometers']:.1f}",
            ]
        )
    return buffer.getvalue()


def analytics_csv_filename(period: str, as_of: date) -> str:
    return f"analytics_{period}_{as_of.isoformat()}.csv"
