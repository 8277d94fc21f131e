from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class TaskIn(BaseModel):
    """Body accepted by create and update. An `id` sent by the client is ignored."""

    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    status: str = ""

    @field_validator("description", "status", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("due_date")
    @classmethod
    def due_date_utc(cls, v):
        # naive timestamps are taken as UTC
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        try:
            return v.astimezone(timezone.utc)
        except OverflowError:
            raise ValueError("due_date out of range")


class TaskOut(BaseModel):
    id: int
    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    status: str = ""

    model_config = ConfigDict(from_attributes=True)

    # columns are nullable; rows written outside the API may hold NULL
    @field_validator("description", "status", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v
