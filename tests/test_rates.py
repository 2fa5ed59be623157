from decimal import Decimal
from types import SimpleNamespace

from backend.app.services.rates import RevenueLedger, period_revenue


def _customer(customer_id, rate_type, rate, is_internal=False):
    return SimpleNamespace(id=customer_id, rate_type=rate_type, default_rate=Decimal(rate), is_internal=is_internal)


def _entry(customer, minutes, is_billable=True):
    return SimpleNamespace(customer=customer, customer_id=customer.id, duration_minutes=minutes, is_billable=is_billable)


def test_hourly_revenue_is_linear_in_duration():
    customer = _customer(1, "hourly", "100.00")
    ledger = RevenueLedger()
    assert ledger.attribute(_entry(customer, 90), customer) == Decimal("150")
    assert ledger.attribute(_entry(customer, 30), customer) == Decimal("50")
    assert ledger.total == Decimal("200")


def test_monthly_customer_counted_once_per_ledger():
    customer = _customer(2, "monthly", "1500.00")
    ledger = RevenueLedger()
    first = ledger.attribute(_entry(customer, 60), customer)
    second = ledger.attribute(_entry(customer, 120), customer)
    assert first == Decimal("1500.00")
    assert second == Decimal("0")
    assert ledger.total == Decimal("1500.00")


def test_each_ledger_tracks_monthly_customers_independently():
    customer = _customer(2, "monthly", "1500.00")
    current, previous = RevenueLedger(), RevenueLedger()
    assert current.attribute(_entry(customer, 60), customer) == Decimal("1500.00")
    assert previous.attribute(_entry(customer, 60), customer) == Decimal("1500.00")


def test_non_billable_and_internal_entries_earn_nothing():
    hourly = _customer(1, "hourly", "100.00")
    internal = _customer(3, "hourly", "100.00", is_internal=True)
    monthly = _customer(2, "monthly", "1500.00")
    ledger = RevenueLedger()
    assert ledger.attribute(_entry(hourly, 60, is_billable=False), hourly) == 0
    assert ledger.attribute(_entry(internal, 60), internal) == 0
    assert ledger.attribute(_entry(monthly, 60, is_billable=False), monthly) == 0
    # A non-billable entry does not consume the monthly fee
    assert ledger.attribute(_entry(monthly, 60), monthly) == Decimal("1500.00")
    assert ledger.attribute(_entry(hourly, 60), None) == 0


def test_period_revenue_uses_fresh_ledger():
    hourly = _customer(1, "hourly", "80.00")
    monthly = _customer(2, "monthly", "1000.00")
    entries = [_entry(hourly, 45), _entry(monthly, 60), _entry(monthly, 30)]
    assert period_revenue(entries) == Decimal("1060")
    assert period_revenue(entries) == Decimal("1060")
