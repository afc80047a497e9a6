from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

SLOT_FREE = "free"
SLOT_BOOKED = "booked"

RESERVATION_PENDING = "pending"
RESERVATION_PAID = "paid"
RESERVATION_CANCELLED = "cancelled"


class Service(Base):
    """Mentoring service offered for booking. Reference data, not edited through the API."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=True)  # minutes
    price = Column(Float, nullable=True)  # major currency units, e.g. 49.5
    mentor_email = Column(String(255), nullable=False)

    slots = relationship("Slot", back_populates="service")


class Slot(Base):
    __tablename__ = "slots"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    start = Column(DateTime, nullable=False, index=True)  # naive UTC
    end = Column(DateTime, nullable=True)
    status = Column(String(20), default=SLOT_FREE, nullable=False, index=True)

    service = relationship("Service", back_populates="slots")


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    slot_id = Column(Integer, ForeignKey("slots.id"), nullable=False)
    meeting_link = Column(String(500), nullable=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    customer_email = Column(String(255), nullable=False)
    status = Column(String(20), default=RESERVATION_PENDING, nullable=False)  # pending, paid, cancelled
    stripe_session_id = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    service = relationship("Service")
    slot = relationship("Slot")
