"""Slot domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import is_blank, to_naive_utc


class SlotCreate(BaseModel):
    """Schema for creating a slot. start is checked by the service so a missing value answers 400."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    serviceId: Optional[int] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return None if is_blank(v) else v

    @field_validator("start", "end")
    @classmethod
    def normalize_datetime(cls, v):
        return to_naive_utc(v)


class SlotUpdate(BaseModel):
    """Schema for updating an existing slot"""

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    status: Optional[Literal["free", "booked"]] = None
    serviceId: Optional[int] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return None if is_blank(v) else v

    @field_validator("start", "end")
    @classmethod
    def normalize_datetime(cls, v):
        return to_naive_utc(v)


class SlotResponse(BaseModel):
    id: int
    serviceId: Optional[int] = None
    start: datetime
    end: Optional[datetime] = None
    status: str


class SlotDaySummary(BaseModel):
    """Free slot count for one day"""

    date: str
    availableCount: int
