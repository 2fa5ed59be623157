from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseBase(BaseModel):
    customer_id: Optional[int] = None
    description: str
    category: Optional[str] = None
    amount: Decimal = Field(gt=0)
    expense_type: Literal["one-off", "monthly"] = "one-off"
    expense_date: date


class ExpenseCreate(ExpenseBase):
    pass


class ExpenseUpdate(BaseModel):
    customer_id: Optional[int] = None
    description: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, gt=0)
    expense_type: Optional[Literal["one-off", "monthly"]] = None
    expense_date: Optional[date] = None


class ExpenseRead(ExpenseBase):
    id: int
    owner_id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
