"""Invoice Builder: turns selected time entries into an invoice with line items."""

import logging
import re
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from backend.app.core.errors import NotFoundError, PartialFailure, StoreError, ValidationError
from backend.app.core.settings import get_settings
from backend.app.core.time import utc_today
from backend.app.crud.base import store_operation
from backend.app.crud.crud_customer import customer_crud
from backend.app.crud.crud_time_entry import time_entry_crud
from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_line_item import InvoiceLineItem
from backend.app.models.time_entry import TimeEntry
from backend.app.services.currency import quantize_money, to_decimal
from backend.app.services.grouping import (
    group_by_task,
    hourly_subtask_description,
    hourly_task_description,
    monthly_description,
    total_hours,
)
from backend.app.services.rates import RATE_TYPE_MONTHLY

logger = logging.getLogger(__name__)

INVOICE_NUMBER_PATTERN = re.compile(r"^INV-(\d{4})-(\d+)$")
DETAIL_LEVELS = ("task", "subtask")


def format_invoice_number(year: int, sequence: int) -> str:
    return f"INV-{year}-{sequence:03d}"


def generate_invoice_number(db: Session, owner_id: int, on_date: date | None = None) -> str:
    """Highest sequence already used by the owner in that year, plus one.

    Backdated invoices continue their own year's sequence.
    """
    year = (on_date or utc_today()).year
    with store_operation(db, "load invoice numbers"):
        rows = (
            db.query(Invoice.invoice_number)
            .filter(Invoice.owner_id == owner_id, Invoice.invoice_number.like(f"INV-{year}-%"))
            .all()
        )
    highest = 0
    for row in rows:
        match = INVOICE_NUMBER_PATTERN.match(row.invoice_number or "")
        if match and int(match.group(1)) == year:
            highest = max(highest, int(match.group(2)))
    return format_invoice_number(year, highest + 1)


def calculate_invoice_totals(subtotal, vat_percentage) -> Tuple[Decimal, Decimal, Decimal]:
    """Return (subtotal, vat_amount, total_amount) rounded to cents."""
    subtotal = quantize_money(subtotal)
    vat_amount = quantize_money(subtotal * to_decimal(vat_percentage) / Decimal("100"))
    return subtotal, vat_amount, subtotal + vat_amount


def calculate_subtotal(lines: List[dict]) -> Decimal:
    """Sum of the already rounded line amounts, so lines always add up to the subtotal."""
    return sum((quantize_money(line["amount"]) for line in lines), Decimal("0.00"))


def _period_label(entries, period_start: date | None = None, period_end: date | None = None) -> str:
    period_start = period_start or min(entry.start_time.date() for entry in entries)
    period_end = period_end or max(entry.start_time.date() for entry in entries)
    return f"{period_start.isoformat()} to {period_end.isoformat()}"


def build_line_items(customer: Customer, entries, detail_level: str, period_label: str) -> List[dict]:
    """Line item field dicts for the selection; monthly customers always get one line."""
    rate = quantize_money(customer.default_rate)
    if customer.rate_type == RATE_TYPE_MONTHLY:
        return [
            {
                "description": monthly_description(entries, detail_level, period_label),
                "quantity": Decimal("1.00"),
                "rate": rate,
                "amount": rate,
                "time_entry_ids": [entry.id for entry in entries],
            }
        ]

    describe = hourly_subtask_description if detail_level == "subtask" else hourly_task_description
    lines = []
    for task_name, task_entries in group_by_task(entries).items():
        hours = total_hours(task_entries)
        lines.append(
            {
                "description": describe(task_name, task_entries),
                "quantity": quantize_money(hours),
                "rate": rate,
                "amount": quantize_money(hours * to_decimal(customer.default_rate)),
                "time_entry_ids": [entry.id for entry in task_entries],
            }
        )
    return lines


def _get_billable_customer(db: Session, owner_id: int, customer_id: int) -> Customer:
    customer = customer_crud.get(db, customer_id=customer_id, owner_id=owner_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    if not customer.is_active:
        raise ValidationError("Customer is inactive")
    if customer.is_internal:
        raise ValidationError("Internal customers cannot be invoiced")
    return customer


def _validate_selection(customer: Customer, entries: List[TimeEntry], requested_ids: List[int]) -> None:
    found_ids = {entry.id for entry in entries}
    missing = [entry_id for entry_id in requested_ids if entry_id not in found_ids]
    if missing:
        raise NotFoundError(f"Time entries not found: {missing}")
    for entry in entries:
        if entry.customer_id != customer.id:
            raise ValidationError(f"Time entry {entry.id} belongs to a different customer")
        if not entry.is_billable:
            raise ValidationError(f"Time entry {entry.id} is not billable")
        if entry.is_invoiced:
            raise ValidationError(f"Time entry {entry.id} has already been invoiced")


def _load_selection(db: Session, owner_id: int, customer_id: int, time_entry_ids: Iterable[int]):
    requested_ids = list(dict.fromkeys(time_entry_ids or []))
    if not requested_ids:
        raise ValidationError("No time entries selected")
    customer = _get_billable_customer(db, owner_id, customer_id)
    entries = time_entry_crud.get_by_ids(db, owner_id=owner_id, entry_ids=requested_ids)
    _validate_selection(customer, entries, requested_ids)
    return customer, entries


def preview_invoice(db: Session, owner_id: int, customer_id: int, time_entry_ids: Iterable[int]) -> dict:
    """Totals the selection would produce, without writing anything."""
    customer, entries = _load_selection(db, owner_id, customer_id, time_entry_ids)
    vat_percentage = get_settings().vat_percentage
    lines = build_line_items(customer, entries, "task", _period_label(entries))
    subtotal, vat_amount, total_amount = calculate_invoice_totals(calculate_subtotal(lines), vat_percentage)
    return {
        "customer_id": customer.id,
        "rate_type": customer.rate_type,
        "total_hours": quantize_money(total_hours(entries)),
        "subtotal": subtotal,
        "vat_percentage": quantize_money(vat_percentage),
        "vat_amount": vat_amount,
        "total_amount": total_amount,
    }


def create_invoice_from_time_entries(
    db: Session,
    owner_id: int,
    customer_id: int,
    time_entry_ids: Iterable[int],
    detail_level: str = "task",
    invoice_date: date | None = None,
    period_start: date | None = None,
    period_end: date | None = None,
    notes: str | None = None,
) -> Invoice:
    """Create a draft invoice for the selected entries and mark them invoiced.

    All validation happens before the first write. The invoice, its line
    items and the invoiced flags are written in one transaction; entries are
    only flipped while still uninvoiced, and any failure rolls the whole unit
    back before re-raising.
    """
    if detail_level not in DETAIL_LEVELS:
        raise ValidationError(f"Unknown detail level '{detail_level}'")
    customer, entries = _load_selection(db, owner_id, customer_id, time_entry_ids)

    settings = get_settings()
    invoice_date = invoice_date or utc_today()
    period_label = _period_label(entries, period_start, period_end)
    payment_terms = customer.payment_terms or settings.default_payment_terms

    lines = build_line_items(customer, entries, detail_level, period_label)
    subtotal, vat_amount, total_amount = calculate_invoice_totals(calculate_subtotal(lines), settings.vat_percentage)
    entry_ids = [entry.id for entry in entries]

    try:
        invoice = Invoice(
            owner_id=owner_id,
            customer_id=customer.id,
            invoice_number=generate_invoice_number(db, owner_id, invoice_date),
            invoice_date=invoice_date,
            due_date=invoice_date + timedelta(days=payment_terms),
            status="draft",
            subtotal=subtotal,
            vat_percentage=settings.vat_percentage,
            vat_amount=vat_amount,
            total_amount=total_amount,
            notes=notes or f"Invoice for services rendered during {period_label}",
        )
        db.add(invoice)
        db.flush()
        for line in lines:
            db.add(InvoiceLineItem(invoice_id=invoice.id, owner_id=owner_id, **line))
        db.flush()

        updated = (
            db.query(TimeEntry)
            .filter(
                TimeEntry.owner_id == owner_id,
                TimeEntry.id.in_(entry_ids),
                TimeEntry.is_invoiced.is_(False),
            )
            .update({TimeEntry.is_invoiced: True, TimeEntry.invoice_id: invoice.id}, synchronize_session=False)
        )
        if updated != len(entry_ids):
            raise ValidationError("Some time entries were invoiced by another request")
        db.commit()
    except ValidationError:
        db.rollback()
        logger.warning("Invoice creation for customer %s rolled back: concurrent invoicing", customer_id)
        raise
    except (SQLAlchemyError, StoreError) as exc:
        db.rollback()
        logger.error("Invoice creation for customer %s rolled back", customer_id, exc_info=True)
        if isinstance(exc, StoreError):
            raise
        raise StoreError("Could not create invoice", original=exc) from exc

    db.refresh(invoice)
    logger.info(
        "Created invoice %s for owner %s with %d line item(s) covering %d time entries",
        invoice.invoice_number,
        owner_id,
        len(lines),
        len(entry_ids),
    )
    return invoice


def get_owned_invoice(db: Session, owner_id: int, invoice_id: int) -> Invoice:
    with store_operation(db, "load invoice"):
        invoice = (
            db.query(Invoice)
            .options(selectinload(Invoice.line_items))
            .filter(Invoice.id == invoice_id, Invoice.owner_id == owner_id)
            .first()
        )
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


def _referenced_time_entry_ids(db: Session, invoice: Invoice) -> List[int]:
    ids: List[int] = []
    for item in invoice.line_items:
        ids.extend(item.time_entry_ids or [])
    with store_operation(db, "load invoiced time entries"):
        linked = db.query(TimeEntry.id).filter(TimeEntry.invoice_id == invoice.id).all()
    ids.extend(row.id for row in linked)
    return list(dict.fromkeys(ids))


def delete_invoice(db: Session, owner_id: int, invoice_id: int) -> dict:
    """Un-invoice every referenced time entry, then delete the invoice.

    Entry resets are best-effort: each one is committed on its own and a
    failure is recorded and logged without stopping the loop or the deletion.
    """
    invoice = get_owned_invoice(db, owner_id, invoice_id)
    invoice_number = invoice.invoice_number
    failures = PartialFailure(f"reset time entries of invoice {invoice_number}")
    reset_ids: List[int] = []

    for entry_id in _referenced_time_entry_ids(db, invoice):
        try:
            entry = (
                db.query(TimeEntry)
                .filter(TimeEntry.id == entry_id, TimeEntry.owner_id == owner_id)
                .first()
            )
            if entry is None:
                failures.record(entry_id, "time entry not found")
                continue
            entry.is_invoiced = False
            entry.invoice_id = None
            db.commit()
            reset_ids.append(entry_id)
        except SQLAlchemyError as exc:
            db.rollback()
            failures.record(entry_id, str(exc))

    with store_operation(db, "delete invoice"):
        db.delete(invoice)
        db.commit()

    logger.info(
        "Deleted invoice %s for owner %s; reset %d time entries, %d failed",
        invoice_number,
        owner_id,
        len(reset_ids),
        len(failures.failures),
    )
    return {
        "status": "deleted",
        "id": invoice_id,
        "reset_time_entry_ids": reset_ids,
        "failed_time_entry_ids": failures.failed_ids,
    }
