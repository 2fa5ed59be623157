"""CRUD operations for customers and their tasks."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.crud.base import store_operation
from backend.app.models.customer import Customer
from backend.app.models.task import Task
from backend.app.schemas.customer import CustomerCreate, CustomerUpdate
from backend.app.schemas.task import TaskCreate


class CRUDCustomer:
    def create(self, db: Session, *, obj_in: CustomerCreate, owner_id: int) -> Customer:
        obj = Customer(owner_id=owner_id, **obj_in.model_dump())
        with store_operation(db, "create customer"):
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def get(self, db: Session, *, customer_id: int, owner_id: int) -> Optional[Customer]:
        with store_operation(db, "load customer"):
            return (
                db.query(Customer)
                .filter(Customer.id == customer_id, Customer.owner_id == owner_id)
                .first()
            )

    def get_multi(self, db: Session, *, owner_id: int, include_inactive: bool = False) -> List[Customer]:
        """Active customers of an owner ordered by name."""
        with store_operation(db, "load customers"):
            query = db.query(Customer).filter(Customer.owner_id == owner_id)
            if not include_inactive:
                query = query.filter(Customer.is_active.is_(True))
            return query.order_by(Customer.company_name.asc()).all()

    def update(self, db: Session, *, db_obj: Customer, obj_in: CustomerUpdate) -> Customer:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is not None:
                setattr(db_obj, field, value)
        with store_operation(db, "update customer"):
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def deactivate(self, db: Session, *, db_obj: Customer) -> Customer:
        db_obj.is_active = False
        with store_operation(db, "deactivate customer"):
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def create_task(self, db: Session, *, customer: Customer, obj_in: TaskCreate) -> Task:
        task = Task(owner_id=customer.owner_id, customer_id=customer.id, **obj_in.model_dump())
        with store_operation(db, "create task"):
            db.add(task)
            db.commit()
            db.refresh(task)
        return task

    def get_tasks(self, db: Session, *, customer: Customer) -> List[Task]:
        with store_operation(db, "load tasks"):
            return (
                db.query(Task)
                .filter(Task.customer_id == customer.id, Task.owner_id == customer.owner_id, Task.is_active.is_(True))
                .order_by(Task.name.asc())
                .all()
            )


customer_crud = CRUDCustomer()
