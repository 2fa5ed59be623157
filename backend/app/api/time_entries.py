"""Time entry endpoints. Durations are always derived on the server."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.core.time import day_bounds
from backend.app.crud.crud_time_entry import time_entry_crud
from backend.app.db.session import get_db
from backend.app.models.time_entry import TimeEntry
from backend.app.models.user import User
from backend.app.schemas.time_entry import TimeEntryCreate, TimeEntryRead, TimeEntryUpdate
from backend.app.services.time_entries import ensure_editable, prepare_time_entry_fields

router = APIRouter(prefix="/time-entries", tags=["time-entries"])

EDITABLE_FIELDS = (
    "customer_id",
    "agreement_id",
    "task_id",
    "subtask",
    "task_description",
    "start_time",
    "end_time",
    "is_billable",
    "drive_required",
    "kilometers",
)


def _get_owned_entry(db: Session, entry_id: int, owner_id: int) -> TimeEntry:
    entry = time_entry_crud.get(db, entry_id=entry_id, owner_id=owner_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Time entry not found")
    return entry


@router.post("/", response_model=TimeEntryRead, status_code=status.HTTP_201_CREATED)
async def create_time_entry(
    entry_in: TimeEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    fields = prepare_time_entry_fields(db, current_user.id, entry_in.model_dump())
    return time_entry_crud.create(db, fields=fields, owner_id=current_user.id)


@router.get("/", response_model=list[TimeEntryRead])
async def list_time_entries(
    start_date: date | None = None,
    end_date: date | None = None,
    customer_id: int | None = None,
    uninvoiced_only: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = day_bounds(start_date, start_date)[0] if start_date else None
    end = day_bounds(end_date, end_date)[1] if end_date else None
    return time_entry_crud.get_in_range(
        db,
        owner_id=current_user.id,
        start=start,
        end=end,
        customer_id=customer_id,
        uninvoiced_only=uninvoiced_only,
    )


@router.get("/{entry_id}", response_model=TimeEntryRead)
async def get_time_entry(entry_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_entry(db, entry_id, current_user.id)


@router.put("/{entry_id}", response_model=TimeEntryRead)
async def update_time_entry(
    entry_id: int,
    entry_in: TimeEntryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = _get_owned_entry(db, entry_id, current_user.id)
    ensure_editable(entry)
    merged = {field: getattr(entry, field) for field in EDITABLE_FIELDS}
    changes = entry_in.model_dump(exclude_unset=True)
    merged.update(changes)
    if not merged["drive_required"] and "kilometers" not in changes:
        merged["kilometers"] = None
    fields = prepare_time_entry_fields(db, current_user.id, merged)
    return time_entry_crud.update(db, db_obj=entry, fields=fields)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_entry(entry_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    entry = _get_owned_entry(db, entry_id, current_user.id)
    ensure_editable(entry)
    time_entry_crud.delete(db, db_obj=entry)
