"""Customer and task endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_customer import customer_crud
from backend.app.db.session import get_db
from backend.app.models.customer import Customer
from backend.app.models.user import User
from backend.app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from backend.app.schemas.task import TaskCreate, TaskRead

router = APIRouter(prefix="/customers", tags=["customers"])


def _get_owned_customer(db: Session, customer_id: int, owner_id: int) -> Customer:
    customer = customer_crud.get(db, customer_id=customer_id, owner_id=owner_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.post("/", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return customer_crud.create(db, obj_in=customer_in, owner_id=current_user.id)


@router.get("/", response_model=list[CustomerRead])
async def list_customers(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return customer_crud.get_multi(db, owner_id=current_user.id, include_inactive=include_inactive)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_customer(db, customer_id, current_user.id)


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(
    customer_id: int,
    customer_in: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_owned_customer(db, customer_id, current_user.id)
    return customer_crud.update(db, db_obj=customer, obj_in=customer_in)


@router.delete("/{customer_id}", response_model=CustomerRead)
async def deactivate_customer(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = _get_owned_customer(db, customer_id, current_user.id)
    return customer_crud.deactivate(db, db_obj=customer)


@router.post("/{customer_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    customer_id: int,
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = _get_owned_customer(db, customer_id, current_user.id)
    return customer_crud.create_task(db, customer=customer, obj_in=task_in)


@router.get("/{customer_id}/tasks", response_model=list[TaskRead])
async def list_tasks(customer_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = _get_owned_customer(db, customer_id, current_user.id)
    return customer_crud.get_tasks(db, customer=customer)
