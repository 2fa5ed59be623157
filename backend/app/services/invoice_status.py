"""Invoice status transitions and delivery hand-off.

draft -> sent -> paid, with cancelled as the terminal alternative to paid.
``overdue`` is derived for sent invoices past their due date; a paid
invoice never moves again and its ``paid_at`` is written once.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from sqlalchemy.orm import Session

from backend.app.core.errors import InvalidStatusTransition, NotFoundError, ValidationError
from backend.app.core.time import utc_now, utc_today
from backend.app.crud.base import store_operation
from backend.app.crud.crud_profile import profile_crud
from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.services.currency import format_currency
from backend.app.services.invoicing import get_owned_invoice

logger = logging.getLogger(__name__)

STATUS_DRAFT = "draft"
STATUS_SENT = "sent"
STATUS_PAID = "paid"
STATUS_OVERDUE = "overdue"
STATUS_CANCELLED = "cancelled"

INVOICE_STATUSES = (STATUS_DRAFT, STATUS_SENT, STATUS_PAID, STATUS_OVERDUE, STATUS_CANCELLED)
SENDABLE_STATUSES = (STATUS_DRAFT, STATUS_SENT, STATUS_OVERDUE)
PAYABLE_STATUSES = (STATUS_SENT, STATUS_OVERDUE)
CANCELLABLE_STATUSES = (STATUS_DRAFT, STATUS_SENT, STATUS_OVERDUE)


def display_status(invoice: Invoice, today: date | None = None) -> str:
    check_date = today or utc_today()
    if invoice.status == STATUS_SENT and invoice.due_date and invoice.due_date < check_date:
        return STATUS_OVERDUE
    return invoice.status


def _transition(db: Session, invoice: Invoice, new_status: str, **timestamps) -> Invoice:
    previous = invoice.status
    invoice.status = new_status
    for field, value in timestamps.items():
        setattr(invoice, field, value)
    with store_operation(db, f"mark invoice {new_status}"):
        db.commit()
        db.refresh(invoice)
    logger.info("Invoice %s: %s -> %s", invoice.invoice_number, previous, new_status)
    return invoice


def mark_invoice_sent(db: Session, invoice: Invoice, sent_at: datetime | None = None) -> Invoice:
    """draft -> sent. Re-sending a sent or overdue invoice keeps its status."""
    if invoice.status not in SENDABLE_STATUSES:
        raise InvalidStatusTransition(f"Cannot send an invoice that is {invoice.status}")
    if invoice.status != STATUS_DRAFT:
        return invoice
    return _transition(db, invoice, STATUS_SENT, sent_at=sent_at or utc_now())


def mark_invoice_paid(db: Session, invoice: Invoice, paid_at: datetime | None = None) -> Invoice:
    if invoice.paid_at is not None or invoice.status == STATUS_PAID:
        raise InvalidStatusTransition("Invoice is already paid")
    if invoice.status not in PAYABLE_STATUSES:
        raise InvalidStatusTransition(f"Cannot mark a {invoice.status} invoice as paid")
    return _transition(db, invoice, STATUS_PAID, paid_at=paid_at or utc_now())


def cancel_invoice(db: Session, invoice: Invoice) -> Invoice:
    if invoice.status not in CANCELLABLE_STATUSES:
        raise InvalidStatusTransition(f"Cannot cancel an invoice that is {invoice.status}")
    return _transition(db, invoice, STATUS_CANCELLED)


@dataclass
class InvoiceDelivery:
    """Everything the rendering/email collaborator needs for one invoice."""

    invoice: Invoice
    customer: Customer
    profile: User
    subject: str
    body: str


InvoiceDispatcher = Callable[[InvoiceDelivery], None]


def log_dispatcher(delivery: InvoiceDelivery) -> None:
    logger.info(
        "Dispatching invoice %s to %s",
        delivery.invoice.invoice_number,
        delivery.customer.email,
    )


def build_delivery(invoice: Invoice, profile: User, subject: str | None = None, body: str | None = None) -> InvoiceDelivery:
    customer = invoice.customer
    if not customer.email:
        raise ValidationError("Customer email is required to send invoice")
    sender = profile.company_name or profile.full_name or profile.email
    amount = format_currency(invoice.total_amount, profile.currency)
    default_subject = f"Invoice {invoice.invoice_number} from {sender}"
    default_body = (
        f"Dear {customer.contact_person or customer.company_name},\n\n"
        f"Please find attached invoice {invoice.invoice_number} for {amount}, "
        f"due on {invoice.due_date.isoformat()}.\n\n"
        f"Kind regards,\n{sender}"
    )
    return InvoiceDelivery(
        invoice=invoice,
        customer=customer,
        profile=profile,
        subject=subject or default_subject,
        body=body or default_body,
    )


def dispatch_invoice(
    db: Session,
    owner_id: int,
    invoice_id: int,
    dispatcher: InvoiceDispatcher = log_dispatcher,
    subject: str | None = None,
    body: str | None = None,
) -> Invoice:
    """Hand the invoice to the delivery collaborator, then mark it sent."""
    invoice = get_owned_invoice(db, owner_id, invoice_id)
    if invoice.status not in SENDABLE_STATUSES:
        raise InvalidStatusTransition(f"Cannot send an invoice that is {invoice.status}")
    profile = profile_crud.get(db, user_id=owner_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    dispatcher(build_delivery(invoice, profile, subject, body))
    return mark_invoice_sent(db, invoice)
