from datetime import date
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel, ConfigDict


class ReportPeriod(BaseModel):
    period: str
    start_date: date
    end_date: date
    previous_start_date: date
    previous_end_date: date


class ClientProfitability(BaseModel):
    customer_id: int
    name: str
    hours: Decimal
    revenue: Decimal
    costs: Decimal
    expenses: Decimal
    profit: Decimal
    profit_margin: Decimal
    kilometers: Decimal


class TimeSeriesPoint(BaseModel):
    label: str
    date: str
    billable: Decimal
    non_billable: Decimal
    revenue: Decimal
    costs: Decimal
    expenses: Decimal
    profit: Decimal


class RevenueTrend(BaseModel):
    current: Decimal
    previous: Decimal
    change: Decimal
    change_percent: Decimal


class AnalyticsReport(BaseModel):
    """Aggregated business metrics for one reporting period."""

    period: ReportPeriod
    currency: str
    total_hours: Decimal
    billable_hours: Decimal
    non_billable_hours: Decimal
    internal_hours: Decimal
    revenue: Decimal
    costs: Decimal
    expenses: Decimal
    monthly_expenses: Decimal
    one_off_expenses: Decimal
    ebitda: Decimal
    ebitda_margin: Decimal
    active_clients: int
    total_kilometers: Decimal
    hours_per_client: List[ClientProfitability]
    time_series: List[TimeSeriesPoint]
    grouping: Literal["daily", "monthly"]
    revenue_trend: RevenueTrend

    model_config = ConfigDict(from_attributes=True)
