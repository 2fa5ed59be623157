"""Revenue attribution for time entries.

Hourly customers earn ``hours * default_rate`` per entry. Monthly customers
earn their flat ``default_rate`` once per reporting period, on the first
billable entry seen; each ledger tracks that independently.
"""

from decimal import Decimal

from backend.app.services.currency import minutes_to_hours, to_decimal

RATE_TYPE_HOURLY = "hourly"
RATE_TYPE_MONTHLY = "monthly"

ZERO = Decimal("0")


def is_revenue_bearing(entry, customer) -> bool:
    return bool(entry.is_billable) and customer is not None and not customer.is_internal


class RevenueLedger:
    """Revenue attribution state for a single reporting period."""

    def __init__(self):
        self.counted_monthly_customers: set[int] = set()
        self.total = ZERO

    def attribute(self, entry, customer) -> Decimal:
        """Return the revenue ``entry`` contributes and add it to the running total."""
        if not is_revenue_bearing(entry, customer):
            return ZERO
        rate = to_decimal(customer.default_rate)
        if customer.rate_type == RATE_TYPE_MONTHLY:
            if customer.id in self.counted_monthly_customers:
                return ZERO
            self.counted_monthly_customers.add(customer.id)
            revenue = rate
        elif customer.rate_type == RATE_TYPE_HOURLY:
            revenue = minutes_to_hours(entry.duration_minutes) * rate
        else:
            return ZERO
        self.total += revenue
        return revenue


def period_revenue(entries) -> Decimal:
    """Total revenue of ``entries`` using a fresh ledger."""
    ledger = RevenueLedger()
    for entry in entries:
        ledger.attribute(entry, entry.customer)
    return ledger.total
