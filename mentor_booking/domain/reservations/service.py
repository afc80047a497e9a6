"""Reservation service - booking a slot and handing the customer to checkout"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import RESERVATION_CANCELLED, RESERVATION_PENDING, SLOT_FREE, Reservation
from ...services.base import PaymentGateway, PaymentGatewayError
from ...shared.validators import is_blank, validate_email
from ...utils.sanitization import sanitize_string
from ..catalog.repository import ServiceRepository
from ..slots.repository import SlotRepository
from .repository import ReservationRepository
from .schemas import ReservationCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("serviceId", "slotId", "customerEmail", "firstName", "lastName", "phone")


class ReservationService:
    """Service layer for reservation business logic"""

    def __init__(self, db: Session, gateway: PaymentGateway):
        self.db = db
        self.gateway = gateway
        self.repo = ReservationRepository()
        self.slots = SlotRepository()

    def get_reservations(self) -> list[Reservation]:
        return self.repo.get_reservations(self.db)

    def delete_reservation(self, reservation_id: int) -> None:
        reservation = self.repo.get_reservation_by_id(self.db, reservation_id)
        if not reservation:
            raise HTTPException(status_code=404, detail="Reservation not found.")
        self.repo.delete_reservation(self.db, reservation)
        logger.info(f"🗑️ Reservation {reservation_id} deleted")

    def create_reservation(self, data: ReservationCreate) -> str:
        """
        Hold the slot, create a pending reservation and open a checkout session.
        Returns the checkout URL.
        """
        missing = [name for name in REQUIRED_FIELDS if is_blank(getattr(data, name))]
        if missing:
            logger.warning(f"⚠️ Reservation request missing fields: {missing}")
            raise HTTPException(status_code=400, detail="Missing required fields.")

        try:
            customer_email = validate_email(data.customerEmail)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        service = ServiceRepository.get_service_by_id(self.db, data.serviceId)
        slot = self.slots.get_slot_by_id(self.db, data.slotId)
        if not service or not slot or slot.status != SLOT_FREE:
            raise HTTPException(status_code=400, detail="Service or slot not available.")

        # Conditional update: only one concurrent request can move the slot off "free"
        if not self.slots.hold_slot(self.db, slot.id):
            logger.warning(f"⚠️ Slot {slot.id} was taken by a concurrent request")
            raise HTTPException(status_code=400, detail="Service or slot not available.")

        reservation = self.repo.create_reservation(
            self.db,
            service_id=service.id,
            slot_id=slot.id,
            customer_email=customer_email,
            first_name=sanitize_string(data.firstName),
            last_name=sanitize_string(data.lastName),
            phone=sanitize_string(data.phone),
            status=RESERVATION_PENDING,
        )
        logger.info(f"📥 Reservation {reservation.id} created (pending) for slot {slot.id}")

        try:
            session = self.gateway.create_checkout_session(
                customer_email=customer_email,
                product_name=service.title or "Mentoring session",
                unit_amount=round((service.price or 0) * 100),
                metadata={"reservationId": str(reservation.id), "slotId": str(slot.id)},
            )
        except PaymentGatewayError as e:
            # Nobody can pay for this reservation, so give the slot back
            self.repo.update_reservation(self.db, reservation, status=RESERVATION_CANCELLED)
            self.slots.set_status(self.db, slot.id, SLOT_FREE)
            logger.error(f"❌ Checkout failed for reservation {reservation.id}, slot {slot.id} released: {e}")
            raise HTTPException(status_code=502, detail="Payment provider unavailable.") from e

        return session.url
