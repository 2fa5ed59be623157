"""Business analytics: hours, revenue, EBITDA and per-client profitability."""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError, StoreError
from backend.app.core.time import day_bounds, utc_today
from backend.app.crud.crud_expense import expense_crud
from backend.app.crud.crud_profile import profile_crud
from backend.app.crud.crud_time_entry import time_entry_crud
from backend.app.models.expense import Expense
from backend.app.models.time_entry import TimeEntry
from backend.app.services.currency import (
    DEFAULT_CURRENCY,
    minutes_to_hours,
    quantize_km,
    quantize_money,
    to_decimal,
)
from backend.app.services.periods import ReportingPeriod, bucket_key, resolve_period, series_buckets
from backend.app.services.rates import RevenueLedger, period_revenue

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
EXPENSE_TYPE_MONTHLY = "monthly"


def _margin(profit: Decimal, revenue: Decimal) -> Decimal:
    if revenue == 0:
        return ZERO
    return profit / revenue * HUNDRED


def _init_client(name: str) -> dict:
    return {
        "name": name,
        "entry_count": 0,
        "minutes": 0,
        "revenue": ZERO,
        "costs": ZERO,
        "expenses": ZERO,
        "kilometers": ZERO,
    }


def _init_bucket() -> dict:
    return {"billable": ZERO, "non_billable": ZERO, "revenue": ZERO, "costs": ZERO, "expenses": ZERO}


def build_analytics_report(
    reporting_period: ReportingPeriod,
    entries: List[TimeEntry],
    previous_entries: List[TimeEntry],
    expenses: List[Expense],
    internal_rate,
    currency: str = DEFAULT_CURRENCY,
) -> dict:
    """Aggregate already fetched rows into the analytics report.

    ``entries`` must have ``customer`` loaded. Values are kept unrounded until
    the report is assembled.
    """
    internal_rate = to_decimal(internal_rate)
    grouping = reporting_period.grouping
    buckets = series_buckets(reporting_period)
    series: Dict[str, dict] = {key: _init_bucket() for key, _ in buckets}

    total_minutes = 0
    billable_minutes = 0
    non_billable_minutes = 0
    internal_minutes = 0
    total_kilometers = ZERO
    clients: Dict[int, dict] = {}
    ledger = RevenueLedger()

    for entry in entries:
        customer = entry.customer
        minutes = entry.duration_minutes or 0
        hours = minutes_to_hours(minutes)
        entry_cost = hours * internal_rate
        is_internal = customer is not None and bool(customer.is_internal)

        total_minutes += minutes
        if is_internal:
            internal_minutes += minutes
        if entry.is_billable and not is_internal:
            billable_minutes += minutes
        else:
            non_billable_minutes += minutes

        kilometers = to_decimal(entry.kilometers) if entry.drive_required and entry.kilometers else ZERO
        total_kilometers += kilometers

        revenue = ledger.attribute(entry, customer)

        if customer is not None and not is_internal:
            client = clients.setdefault(customer.id, _init_client(customer.company_name))
            client["entry_count"] += 1
            client["minutes"] += minutes
            client["revenue"] += revenue
            client["costs"] += entry_cost
            client["kilometers"] += kilometers

        bucket = series.get(bucket_key(entry.start_time.date(), grouping))
        if bucket is not None:
            if entry.is_billable and not is_internal:
                bucket["billable"] += hours
            else:
                bucket["non_billable"] += hours
            bucket["revenue"] += revenue
            bucket["costs"] += entry_cost

    total_expenses = ZERO
    monthly_expenses = ZERO
    one_off_expenses = ZERO
    for expense in expenses:
        amount = to_decimal(expense.amount)
        total_expenses += amount
        if expense.expense_type == EXPENSE_TYPE_MONTHLY:
            monthly_expenses += amount
        else:
            one_off_expenses += amount

        customer = expense.customer
        if customer is not None and not customer.is_internal:
            client = clients.setdefault(customer.id, _init_client(customer.company_name))
            client["expenses"] += amount

        bucket = series.get(bucket_key(expense.expense_date, grouping))
        if bucket is not None:
            bucket["expenses"] += amount

    total_revenue = ledger.total
    costs = minutes_to_hours(total_minutes) * internal_rate
    ebitda = total_revenue - costs - total_expenses

    hours_per_client = []
    for customer_id, client in clients.items():
        profit = client["revenue"] - client["costs"] - client["expenses"]
        hours_per_client.append(
            {
                "customer_id": customer_id,
                "name": client["name"],
                "hours": quantize_money(minutes_to_hours(client["minutes"])),
                "revenue": quantize_money(client["revenue"]),
                "costs": quantize_money(client["costs"]),
                "expenses": quantize_money(client["expenses"]),
                "profit": quantize_money(profit),
                "profit_margin": quantize_money(_margin(profit, client["revenue"])),
                "kilometers": quantize_km(client["kilometers"]),
            }
        )
    hours_per_client.sort(key=lambda row: row["profit"], reverse=True)

    time_series = []
    for key, label in buckets:
        bucket = series[key]
        time_series.append(
            {
                "label": label,
                "date": key,
                "billable": quantize_money(bucket["billable"]),
                "non_billable": quantize_money(bucket["non_billable"]),
                "revenue": quantize_money(bucket["revenue"]),
                "costs": quantize_money(bucket["costs"]),
                "expenses": quantize_money(bucket["expenses"]),
                "profit": quantize_money(bucket["revenue"] - bucket["costs"] - bucket["expenses"]),
            }
        )

    previous_revenue = period_revenue(previous_entries)
    change = total_revenue - previous_revenue
    change_percent = change / previous_revenue * HUNDRED if previous_revenue > 0 else ZERO

    return {
        "period": reporting_period.as_dict(),
        "currency": currency or DEFAULT_CURRENCY,
        "total_hours": quantize_money(minutes_to_hours(total_minutes)),
        "billable_hours": quantize_money(minutes_to_hours(billable_minutes)),
        "non_billable_hours": quantize_money(minutes_to_hours(non_billable_minutes)),
        "internal_hours": quantize_money(minutes_to_hours(internal_minutes)),
        "revenue": quantize_money(total_revenue),
        "costs": quantize_money(costs),
        "expenses": quantize_money(total_expenses),
        "monthly_expenses": quantize_money(monthly_expenses),
        "one_off_expenses": quantize_money(one_off_expenses),
        "ebitda": quantize_money(ebitda),
        "ebitda_margin": quantize_money(_margin(ebitda, total_revenue)),
        "active_clients": sum(1 for client in clients.values() if client["entry_count"] > 0),
        "total_kilometers": quantize_km(total_kilometers),
        "hours_per_client": hours_per_client,
        "time_series": time_series,
        "grouping": grouping,
        "revenue_trend": {
            "current": quantize_money(total_revenue),
            "previous": quantize_money(previous_revenue),
            "change": quantize_money(change),
            "change_percent": quantize_money(change_percent),
        },
    }


def _fetch_expenses_or_empty(db: Session, owner_id: int, start: date, end: date) -> List[Expense]:
    try:
        return expense_crud.get_in_range(db, owner_id=owner_id, start_date=start, end_date=end)
    except StoreError as exc:
        logger.warning("Expenses unavailable for owner %s, reporting without them: %s", owner_id, exc.original)
        return []


def compute_metrics(
    db: Session,
    owner_id: int,
    period: str = "month",
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> dict:
    """Build the analytics report for ``owner_id`` over the requested period."""
    reporting_period = resolve_period(period, today or utc_today(), start_date, end_date)

    profile = profile_crud.get(db, user_id=owner_id)
    if profile is None:
        raise NotFoundError("Profile not found")

    current_start, current_end = day_bounds(reporting_period.start, reporting_period.end)
    previous_start, previous_end = day_bounds(reporting_period.previous_start, reporting_period.previous_end)
    entries = time_entry_crud.get_in_range(db, owner_id=owner_id, start=current_start, end=current_end)
    previous_entries = time_entry_crud.get_in_range(db, owner_id=owner_id, start=previous_start, end=previous_end)
    expenses = _fetch_expenses_or_empty(db, owner_id, reporting_period.start, reporting_period.end)

    return build_analytics_report(
        reporting_period,
        entries,
        previous_entries,
        expenses,
        profile.internal_hourly_rate,
        profile.currency,
    )
