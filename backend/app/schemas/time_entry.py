"""Time entry schemas.

``duration_minutes`` is never accepted from clients; it is derived from the
start and end timestamps on every write.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeEntryBase(BaseModel):
    customer_id: int
    agreement_id: Optional[int] = None
    task_id: Optional[int] = None
    subtask: Optional[str] = None
    task_description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    is_billable: bool = True
    drive_required: bool = False
    kilometers: Optional[Decimal] = Field(default=None, ge=0)


class TimeEntryCreate(TimeEntryBase):
    pass


class TimeEntryUpdate(BaseModel):
    customer_id: Optional[int] = None
    agreement_id: Optional[int] = None
    task_id: Optional[int] = None
    subtask: Optional[str] = None
    task_description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_billable: Optional[bool] = None
    drive_required: Optional[bool] = None
    kilometers: Optional[Decimal] = Field(default=None, ge=0)


class TimeEntryRead(TimeEntryBase):
    id: int
    owner_id: int
    duration_minutes: int
    is_invoiced: bool
    invoice_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
