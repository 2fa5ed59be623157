"""CRUD operations for time entries."""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, joinedload

from backend.app.crud.base import store_operation
from backend.app.models.time_entry import TimeEntry


class CRUDTimeEntry:
    def create(self, db: Session, *, fields: dict, owner_id: int) -> TimeEntry:
        obj = TimeEntry(owner_id=owner_id, **fields)
        with store_operation(db, "create time entry"):
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def get(self, db: Session, *, entry_id: int, owner_id: int) -> Optional[TimeEntry]:
        with store_operation(db, "load time entry"):
            return db.query(TimeEntry).filter(TimeEntry.id == entry_id, TimeEntry.owner_id == owner_id).first()

    def get_in_range(
        self,
        db: Session,
        *,
        owner_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
        customer_id: int | None = None,
        uninvoiced_only: bool = False,
    ) -> List[TimeEntry]:
        """Entries whose start falls in the inclusive range, with customer and task joined."""
        with store_operation(db, "load time entries"):
            query = (
                db.query(TimeEntry)
                .options(joinedload(TimeEntry.customer), joinedload(TimeEntry.task))
                .filter(TimeEntry.owner_id == owner_id)
            )
            if start is not None:
                query = query.filter(TimeEntry.start_time >= start)
            if end is not None:
                query = query.filter(TimeEntry.start_time <= end)
            if customer_id is not None:
                query = query.filter(TimeEntry.customer_id == customer_id)
            if uninvoiced_only:
                query = query.filter(TimeEntry.is_billable.is_(True), TimeEntry.is_invoiced.is_(False))
            return query.order_by(TimeEntry.start_time.asc(), TimeEntry.id.asc()).all()

    def get_by_ids(self, db: Session, *, owner_id: int, entry_ids: Iterable[int]) -> List[TimeEntry]:
        ids = list(entry_ids)
        if not ids:
            return []
        with store_operation(db, "load time entries"):
            return (
                db.query(TimeEntry)
                .options(joinedload(TimeEntry.customer), joinedload(TimeEntry.task))
                .filter(TimeEntry.owner_id == owner_id, TimeEntry.id.in_(ids))
                .order_by(TimeEntry.start_time.asc(), TimeEntry.id.asc())
                .all()
            )

    def update(self, db: Session, *, db_obj: TimeEntry, fields: dict) -> TimeEntry:
        for field, value in fields.items():
            setattr(db_obj, field, value)
        with store_operation(db, "update time entry"):
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: TimeEntry) -> TimeEntry:
        with store_operation(db, "delete time entry"):
            db.delete(db_obj)
            db.commit()
        return db_obj


time_entry_crud = CRUDTimeEntry()
