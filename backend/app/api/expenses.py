"""Expense endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_customer import customer_crud
from backend.app.crud.crud_expense import expense_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _check_customer(db: Session, customer_id: int | None, owner_id: int) -> None:
    if customer_id is not None and not customer_crud.get(db, customer_id=customer_id, owner_id=owner_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")


@router.post("/", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_customer(db, expense_in.customer_id, current_user.id)
    return expense_crud.create(db, obj_in=expense_in, owner_id=current_user.id)


@router.get("/", response_model=list[ExpenseRead])
async def list_expenses(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return expense_crud.get_in_range(db, owner_id=current_user.id, start_date=start_date, end_date=end_date)


@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense(
    expense_id: int,
    expense_in: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    expense = expense_crud.get(db, expense_id=expense_id, owner_id=current_user.id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    _check_customer(db, expense_in.customer_id, current_user.id)
    return expense_crud.update(db, db_obj=expense, obj_in=expense_in)


@router.delete("/{expense_id}", response_model=ExpenseRead)
async def deactivate_expense(expense_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    expense = expense_crud.get(db, expense_id=expense_id, owner_id=current_user.id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense_crud.deactivate(db, db_obj=expense)
