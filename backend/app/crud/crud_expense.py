"""CRUD operations for expenses."""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from backend.app.crud.base import store_operation
from backend.app.models.expense import Expense
from backend.app.schemas.expense import ExpenseCreate, ExpenseUpdate


class CRUDExpense:
    def create(self, db: Session, *, obj_in: ExpenseCreate, owner_id: int) -> Expense:
        obj = Expense(owner_id=owner_id, **obj_in.model_dump())
        with store_operation(db, "create expense"):
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def get(self, db: Session, *, expense_id: int, owner_id: int) -> Optional[Expense]:
        with store_operation(db, "load expense"):
            return db.query(Expense).filter(Expense.id == expense_id, Expense.owner_id == owner_id).first()

    def get_in_range(
        self,
        db: Session,
        *,
        owner_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> List[Expense]:
        """Active expenses dated within the inclusive range, customer joined."""
        with store_operation(db, "load expenses"):
            query = (
                db.query(Expense)
                .options(joinedload(Expense.customer))
                .filter(Expense.owner_id == owner_id, Expense.is_active.is_(True))
            )
            if start_date is not None:
                query = query.filter(Expense.expense_date >= start_date)
            if end_date is not None:
                query = query.filter(Expense.expense_date <= end_date)
            return query.order_by(Expense.expense_date.asc(), Expense.id.asc()).all()

    def update(self, db: Session, *, db_obj: Expense, obj_in: ExpenseUpdate) -> Expense:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        with store_operation(db, "update expense"):
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def deactivate(self, db: Session, *, db_obj: Expense) -> Expense:
        db_obj.is_active = False
        with store_operation(db, "deactivate expense"):
            db.commit()
            db.refresh(db_obj)
        return db_obj


expense_crud = CRUDExpense()
