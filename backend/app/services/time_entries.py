"""Write rules for time entries: derived duration, drive metadata and ownership."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError, ValidationError
from backend.app.core.time import to_naive_utc
from backend.app.models.agreement import Agreement
from backend.app.models.customer import Customer
from backend.app.models.task import Task
from backend.app.models.time_entry import TimeEntry


def compute_duration_minutes(start_time: datetime, end_time: datetime) -> int:
    start = to_naive_utc(start_time)
    end = to_naive_utc(end_time)
    minutes = int((end - start).total_seconds() // 60)
    if minutes <= 0:
        raise ValidationError("End time must be after start time")
    return minutes


def validate_drive(drive_required: bool, kilometers: Decimal | None) -> Decimal | None:
    """Return the kilometers to store; they are required exactly when a drive is."""
    if drive_required:
        if kilometers is None or kilometers <= 0:
            raise ValidationError("Kilometers are required when a drive is required")
        return kilometers
    if kilometers not in (None, 0):
        raise ValidationError("Kilometers can only be set when a drive is required")
    return None


def _check_references(db: Session, owner_id: int, customer_id: int, task_id: int | None, agreement_id: int | None) -> None:
    customer = db.query(Customer).filter(Customer.id == customer_id, Customer.owner_id == owner_id).first()
    if not customer:
        raise NotFoundError("Customer not found")
    if task_id is not None:
        task = db.query(Task).filter(Task.id == task_id, Task.owner_id == owner_id).first()
        if not task:
            raise NotFoundError("Task not found")
        if task.customer_id != customer_id:
            raise ValidationError("Task belongs to a different customer")
    if agreement_id is not None:
        agreement = db.query(Agreement).filter(Agreement.id == agreement_id, Agreement.owner_id == owner_id).first()
        if not agreement:
            raise NotFoundError("Agreement not found")
        if agreement.customer_id != customer_id:
            raise ValidationError("Agreement belongs to a different customer")


def prepare_time_entry_fields(db: Session, owner_id: int, fields: dict) -> dict:
    """Validate a complete set of time entry fields and fill in derived values."""
    _check_references(db, owner_id, fields["customer_id"], fields.get("task_id"), fields.get("agreement_id"))
    prepared = dict(fields)
    prepared["start_time"] = to_naive_utc(fields["start_time"])
    prepared["end_time"] = to_naive_utc(fields["end_time"])
    prepared["duration_minutes"] = compute_duration_minutes(prepared["start_time"], prepared["end_time"])
    prepared["kilometers"] = validate_drive(bool(fields.get("drive_required")), fields.get("kilometers"))
    return prepared


def ensure_editable(entry: TimeEntry) -> None:
    if entry.is_invoiced:
        raise ValidationError("Time entry has already been invoiced")
