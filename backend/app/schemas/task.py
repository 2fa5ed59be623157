from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TaskCreate(BaseModel):
    name: str
    description: Optional[str] = None


class TaskRead(TaskCreate):
    id: int
    owner_id: int
    customer_id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
