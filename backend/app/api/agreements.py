"""Agreement endpoints. Agreements are informational and never affect billing."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.crud.crud_agreement import agreement_crud
from backend.app.crud.crud_customer import customer_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.agreement import AgreementCreate, AgreementRead, AgreementUpdate

router = APIRouter(prefix="/agreements", tags=["agreements"])


@router.post("/", response_model=AgreementRead, status_code=status.HTTP_201_CREATED)
async def create_agreement(
    agreement_in: AgreementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not customer_crud.get(db, customer_id=agreement_in.customer_id, owner_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return agreement_crud.create(db, obj_in=agreement_in, owner_id=current_user.id)


@router.get("/", response_model=list[AgreementRead])
async def list_agreements(
    customer_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return agreement_crud.get_multi(db, owner_id=current_user.id, customer_id=customer_id)


@router.put("/{agreement_id}", response_model=AgreementRead)
async def update_agreement(
    agreement_id: int,
    agreement_in: AgreementUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    agreement = agreement_crud.get(db, agreement_id=agreement_id, owner_id=current_user.id)
    if not agreement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agreement not found")
    return agreement_crud.update(db, db_obj=agreement, obj_in=agreement_in)


@router.delete("/{agreement_id}", response_model=AgreementRead)
async def delete_agreement(agreement_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    agreement = agreement_crud.get(db, agreement_id=agreement_id, owner_id=current_user.id)
    if not agreement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agreement not found")
    return agreement_crud.delete(db, db_obj=agreement)
