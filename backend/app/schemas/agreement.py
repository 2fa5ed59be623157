"""Agreement schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class AgreementBase(BaseModel):
    customer_id: int
    name: str
    description: Optional[str] = None
    contract_type: Literal["hourly", "monthly"] = "hourly"
    rate: Optional[Decimal] = None
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AgreementCreate(AgreementBase):
    pass


class AgreementUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    contract_type: Optional[Literal["hourly", "monthly"]] = None
    rate: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None


class AgreementRead(AgreementBase):
    id: int
    owner_id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
