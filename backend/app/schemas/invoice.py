"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvoiceCreate(BaseModel):
    customer_id: int
    time_entry_ids: List[int] = Field(default_factory=list)
    detail_level: Literal["task", "subtask"] = "task"
    invoice_date: Optional[date] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    notes: Optional[str] = None


class InvoicePreviewRequest(BaseModel):
    customer_id: int
    time_entry_ids: List[int] = Field(default_factory=list)


class InvoicePreview(BaseModel):
    customer_id: int
    rate_type: str
    total_hours: Decimal
    subtotal: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    total_amount: Decimal


class InvoiceLineItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    time_entry_ids: List[int]
    created_at: datetime


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    customer_id: int

    invoice_number: str
    invoice_date: date
    due_date: date
    status: str
    subtotal: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    total_amount: Decimal
    notes: Optional[str] = None

    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class InvoiceDetail(InvoiceRead):
    line_items: List[InvoiceLineItemRead] = Field(default_factory=list)


class InvoiceDeleteResult(BaseModel):
    status: str
    id: int
    reset_time_entry_ids: List[int]
    failed_time_entry_ids: List[int]


class InvoiceSendRequest(BaseModel):
    subject: Optional[str] = None
    body: Optional[str] = None
