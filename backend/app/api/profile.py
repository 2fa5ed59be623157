"""Business profile endpoints: internal hourly rate, currency and company details."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_profile import profile_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.user import CurrencyOption, ProfileRead, ProfileUpdate
from backend.app.services.currency import currency_options

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileRead)
async def get_my_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    user = profile_crud.get(db, user_id=current_user.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.put("/me", response_model=ProfileRead)
async def update_my_profile(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = profile_crud.get(db, user_id=current_user.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile_crud.update(db, db_obj=user, obj_in=profile)


@router.get("/currencies", response_model=List[CurrencyOption])
async def list_currencies():
    return currency_options()
