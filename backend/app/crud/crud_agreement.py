"""CRUD operations for agreements."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.crud.base import store_operation
from backend.app.models.agreement import Agreement
from backend.app.schemas.agreement import AgreementCreate, AgreementUpdate


class CRUDAgreement:
    def create(self, db: Session, *, obj_in: AgreementCreate, owner_id: int) -> Agreement:
        obj = Agreement(owner_id=owner_id, **obj_in.model_dump())
        with store_operation(db, "create agreement"):
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def get(self, db: Session, *, agreement_id: int, owner_id: int) -> Optional[Agreement]:
        with store_operation(db, "load agreement"):
            return (
                db.query(Agreement)
                .filter(Agreement.id == agreement_id, Agreement.owner_id == owner_id)
                .first()
            )

    def get_multi(self, db: Session, *, owner_id: int, customer_id: int | None = None) -> List[Agreement]:
        with store_operation(db, "load agreements"):
            query = db.query(Agreement).filter(Agreement.owner_id == owner_id)
            if customer_id is not None:
                query = query.filter(Agreement.customer_id == customer_id)
            return query.order_by(Agreement.start_date.desc(), Agreement.id.desc()).all()

    def update(self, db: Session, *, db_obj: Agreement, obj_in: AgreementUpdate) -> Agreement:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        with store_operation(db, "update agreement"):
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Agreement) -> Agreement:
        with store_operation(db, "delete agreement"):
            db.delete(db_obj)
            db.commit()
        return db_obj


agreement_crud = CRUDAgreement()
