"""User schemas used for registration, login and the business profile."""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None


class UserRead(BaseModel):
    id: int
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


class ProfileBase(BaseModel):
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    business_email: Optional[str] = None
    business_vat_number: Optional[str] = None


class ProfileUpdate(ProfileBase):
    internal_hourly_rate: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[Literal["USD", "EUR", "DKK"]] = None


class ProfileRead(ProfileBase):
    id: int
    email: EmailStr
    internal_hourly_rate: Decimal
    currency: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CurrencyOption(BaseModel):
    value: str
    label: str
