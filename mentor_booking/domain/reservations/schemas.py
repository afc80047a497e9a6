"""Reservation domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..catalog.schemas import ServiceResponse
from ..slots.schemas import SlotResponse


class ReservationCreate(BaseModel):
    """
    Public booking request.
    Every field is required; they are declared optional so the service can answer
    a single 400 listing the problem instead of a 422 per field.
    """

    serviceId: Optional[int] = None
    slotId: Optional[int] = None
    customerEmail: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    phone: Optional[str] = None


class CheckoutResponse(BaseModel):
    checkoutUrl: str


class ReservationResponse(BaseModel):
    id: int
    serviceId: int
    slotId: int
    service: Optional[ServiceResponse] = None
    slot: Optional[SlotResponse] = None
    firstName: str
    lastName: str
    phone: str
    customerEmail: str
    status: str
    meetingLink: Optional[str] = None
    stripeSessionId: Optional[str] = None
    createdAt: Optional[datetime] = None


class VerifyPaymentRequest(BaseModel):
    sessionId: Optional[str] = None
