from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from backend.app.core.errors import NotFoundError, ValidationError
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.customer import Customer
from backend.app.models.task import Task
from backend.app.models.user import User
from backend.app.services.time_entries import (
    compute_duration_minutes,
    ensure_editable,
    prepare_time_entry_fields,
    validate_drive,
)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_duration_is_derived_from_timestamps():
    start = datetime(2025, 3, 3, 9, 0)
    assert compute_duration_minutes(start, start + timedelta(minutes=95)) == 95
    aware = datetime(2025, 3, 3, 10, 0, tzinfo=timezone(timedelta(hours=1)))
    assert compute_duration_minutes(aware, datetime(2025, 3, 3, 9, 30)) == 30


def test_end_before_start_is_rejected():
    start = datetime(2025, 3, 3, 9, 0)
    with pytest.raises(ValidationError):
        compute_duration_minutes(start, start)
    with pytest.raises(ValidationError):
        compute_duration_minutes(start, start - timedelta(minutes=5))


def test_drive_requires_kilometers():
    assert validate_drive(True, Decimal("12.5")) == Decimal("12.5")
    assert validate_drive(False, None) is None
    with pytest.raises(ValidationError):
        validate_drive(True, None)
    with pytest.raises(ValidationError):
        validate_drive(False, Decimal("3"))


def test_invoiced_entries_are_not_editable():
    class Entry:
        is_invoiced = True

    with pytest.raises(ValidationError):
        ensure_editable(Entry())


def test_prepare_fields_checks_task_belongs_to_customer():
    db = SessionLocal()
    try:
        user = User(email="owner@example.com", hashed_password="x", is_active=True)
        db.add(user)
        db.commit()
        db.refresh(user)
        first = Customer(owner_id=user.id, company_name="First")
        second = Customer(owner_id=user.id, company_name="Second")
        db.add_all([first, second])
        db.commit()
        task = Task(owner_id=user.id, customer_id=second.id, name="Other work")
        db.add(task)
        db.commit()

        fields = {
            "customer_id": first.id,
            "task_id": None,
            "start_time": datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc),
            "end_time": datetime(2025, 3, 3, 10, 30, tzinfo=timezone.utc),
            "drive_required": False,
            "kilometers": None,
        }
        prepared = prepare_time_entry_fields(db, user.id, fields)
        assert prepared["duration_minutes"] == 90
        assert prepared["start_time"].tzinfo is None

        with pytest.raises(ValidationError):
            prepare_time_entry_fields(db, user.id, {**fields, "task_id": task.id})
        with pytest.raises(NotFoundError):
            prepare_time_entry_fields(db, user.id, {**fields, "customer_id": 9999})
    finally:
        db.close()
