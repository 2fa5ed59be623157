"""Customer schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerBase(BaseModel):
    company_name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    billing_address: Optional[str] = None
    vat_number: Optional[str] = None
    rate_type: Literal["hourly", "monthly"] = "hourly"
    default_rate: Decimal = Field(default=Decimal("0.00"), ge=0)
    payment_terms: int = Field(default=14, ge=1, le=365)
    is_internal: bool = False


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    billing_address: Optional[str] = None
    vat_number: Optional[str] = None
    rate_type: Optional[Literal["hourly", "monthly"]] = None
    default_rate: Optional[Decimal] = Field(default=None, ge=0)
    payment_terms: Optional[int] = Field(default=None, ge=1, le=365)
    is_internal: Optional[bool] = None


class CustomerRead(CustomerBase):
    id: int
    owner_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
