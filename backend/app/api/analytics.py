"""Analytics endpoints: period metrics and the per-client CSV export."""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.core.time import utc_today
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.analytics import AnalyticsReport
from backend.app.services.analytics import compute_metrics
from backend.app.services.analytics_export import analytics_csv_filename, build_analytics_csv

router = APIRouter(prefix="/analytics", tags=["analytics"])

Period = Literal["week", "month", "year", "custom"]


@router.get("/metrics", response_model=AnalyticsReport)
async def get_metrics(
    period: Period = "month",
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return compute_metrics(db, current_user.id, period=period, start_date=start_date, end_date=end_date)


@router.get("/export.csv")
async def export_metrics_csv(
    period: Period = "month",
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    report = compute_metrics(db, current_user.id, period=period, start_date=start_date, end_date=end_date)
    filename = analytics_csv_filename(period, utc_today())
    return Response(
        content=build_analytics_csv(report),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
