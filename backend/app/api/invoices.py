"""Invoice routes: building invoices from time entries and moving them through their statuses."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_current_user
from backend.app.core.time import utc_today
from backend.app.crud.base import store_operation
from backend.app.db.session import get_db
from backend.app.dependencies.delivery import get_invoice_dispatcher
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.schemas.invoice import (
    InvoiceCreate,
    InvoiceDeleteResult,
    InvoiceDetail,
    InvoicePreview,
    InvoicePreviewRequest,
    InvoiceRead,
    InvoiceSendRequest,
)
from backend.app.services.invoice_status import (
    InvoiceDispatcher,
    cancel_invoice,
    dispatch_invoice,
    display_status,
    mark_invoice_paid,
)
from backend.app.services.invoicing import (
    create_invoice_from_time_entries,
    delete_invoice,
    get_owned_invoice,
    preview_invoice,
)

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _with_display_status(invoice: Invoice, schema=InvoiceRead):
    data = schema.model_validate(invoice)
    return data.model_copy(update={"status": display_status(invoice)})


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices(
    status: str | None = None,
    customer_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with store_operation(db, "load invoices"):
        query = db.query(Invoice).filter(Invoice.owner_id == current_user.id)
        if customer_id:
            query = query.filter(Invoice.customer_id == customer_id)
        invoices = query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    today = utc_today()
    results = []
    for invoice in invoices:
        current_status = display_status(invoice, today)
        if status and current_status != status:
            continue
        results.append(InvoiceRead.model_validate(invoice).model_copy(update={"status": current_status}))
    return results


@router.post("/preview", response_model=InvoicePreview)
async def preview(
    payload: InvoicePreviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return preview_invoice(db, current_user.id, payload.customer_id, payload.time_entry_ids)


@router.post("/", response_model=InvoiceDetail, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice = create_invoice_from_time_entries(
        db,
        current_user.id,
        payload.customer_id,
        payload.time_entry_ids,
        detail_level=payload.detail_level,
        invoice_date=payload.invoice_date,
        period_start=payload.period_start,
        period_end=payload.period_end,
        notes=payload.notes,
    )
    return _with_display_status(invoice, InvoiceDetail)


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = get_owned_invoice(db, current_user.id, invoice_id)
    return _with_display_status(invoice, InvoiceDetail)


@router.delete("/{invoice_id}", response_model=InvoiceDeleteResult)
async def remove_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return delete_invoice(db, current_user.id, invoice_id)


@router.post("/{invoice_id}/send", response_model=InvoiceRead)
async def send_invoice(
    invoice_id: int,
    payload: InvoiceSendRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: InvoiceDispatcher = Depends(get_invoice_dispatcher),
):
    payload = payload or InvoiceSendRequest()
    invoice = dispatch_invoice(
        db,
        current_user.id,
        invoice_id,
        dispatcher=dispatcher,
        subject=payload.subject,
        body=payload.body,
    )
    return _with_display_status(invoice)


@router.post("/{invoice_id}/mark-paid", response_model=InvoiceRead)
async def mark_paid(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = get_owned_invoice(db, current_user.id, invoice_id)
    return _with_display_status(mark_invoice_paid(db, invoice))


@router.post("/{invoice_id}/cancel", response_model=InvoiceRead)
async def cancel(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = get_owned_invoice(db, current_user.id, invoice_id)
    return _with_display_status(cancel_invoice(db, invoice))
