"""Profile reads and writes; the profile lives on the user row."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.crud.base import store_operation
from backend.app.models.user import User
from backend.app.schemas.user import ProfileUpdate


class CRUDProfile:
    def get(self, db: Session, *, user_id: int) -> Optional[User]:
        with store_operation(db, "load profile"):
            return db.query(User).filter(User.id == user_id).first()

    def update(self, db: Session, *, db_obj: User, obj_in: ProfileUpdate) -> User:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is not None:
                setattr(db_obj, field, value)
        with store_operation(db, "update profile"):
            db.commit()
            db.refresh(db_obj)
        return db_obj


profile_crud = CRUDProfile()
