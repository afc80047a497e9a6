"""
Reservation Orchestrator

Applies a completed checkout to the reservation and its slot, then runs the
follow-up side effects:

1. reservation -> paid (with the checkout session id)
2. slot -> booked
3. calendar event with a meeting link for the slot's start and the service duration
4. meeting link saved on the reservation
5. confirmation email to the customer

Steps 3-5 are best effort. A failure there is logged and the reservation stays
paid; nothing is rolled back or retried.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...models import RESERVATION_CANCELLED, RESERVATION_PAID, SLOT_BOOKED, Service, Slot
from ...services.base import MeetingScheduler, Notifier
from ..slots.repository import SlotRepository
from .repository import ReservationRepository

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
DEFAULT_MEETING_MINUTES = 60


@dataclass
class OrchestrationResult:
    reservation_id: Optional[int]
    payment_applied: bool = False
    meeting_link: Optional[str] = None
    email_sent: bool = False


def meeting_duration(service: Service, slot: Slot) -> int:
    """Service duration, else the slot's own window, else an hour"""
    if service.duration:
        return service.duration
    if slot.end and slot.end > slot.start:
        return int((slot.end - slot.start).total_seconds() // 60)
    return DEFAULT_MEETING_MINUTES


def _parse_id(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ReservationOrchestrator:
    def __init__(self, db: Session, scheduler: MeetingScheduler, notifier: Notifier):
        self.db = db
        self.scheduler = scheduler
        self.notifier = notifier
        self.reservations = ReservationRepository()
        self.slots = SlotRepository()

    async def handle_event(self, event: dict[str, Any]) -> Optional[OrchestrationResult]:
        """Dispatch a verified payment event. Returns None for events that are not handled."""
        event_type = event.get("type")
        if event_type != CHECKOUT_COMPLETED:
            logger.info(f"ℹ️ Ignoring payment event {event.get('id')} of type {event_type}")
            return None

        session = (event.get("data") or {}).get("object") or {}
        metadata = session.get("metadata") or {}
        reservation_id = _parse_id(metadata.get("reservationId"))
        slot_id = _parse_id(metadata.get("slotId"))

        if reservation_id is None:
            logger.error(f"❌ Checkout session {session.get('id')} has no usable reservationId: {metadata}")
            return OrchestrationResult(reservation_id=None)

        if session.get("payment_status") == "unpaid":
            logger.warning(f"⚠️ Checkout session {session.get('id')} completed without payment, skipping")
            return OrchestrationResult(reservation_id=reservation_id)

        return await self.confirm_payment(reservation_id, slot_id, session.get("id"))

    async def confirm_payment(
        self, reservation_id: int, slot_id: Optional[int], session_id: Optional[str]
    ) -> OrchestrationResult:
        result = OrchestrationResult(reservation_id=reservation_id)

        reservation = self.reservations.get_reservation_by_id(self.db, reservation_id)
        if not reservation:
            logger.error(f"❌ Payment received for unknown reservation {reservation_id}")
            return result

        if reservation.status == RESERVATION_PAID:
            logger.info(f"ℹ️ Reservation {reservation_id} already paid, ignoring repeated event")
            result.meeting_link = reservation.meeting_link
            return result

        if reservation.status == RESERVATION_CANCELLED:
            logger.warning(f"⚠️ Payment received for cancelled reservation {reservation_id}, marking paid")

        if slot_id is not None and slot_id != reservation.slot_id:
            logger.warning(
                f"⚠️ Checkout metadata slot {slot_id} differs from reservation slot {reservation.slot_id}"
            )

        reservation = self.reservations.update_reservation(
            self.db, reservation, status=RESERVATION_PAID, stripe_session_id=session_id
        )
        self.slots.set_status(self.db, reservation.slot_id, SLOT_BOOKED)
        result.payment_applied = True
        logger.info(f"💰 Reservation {reservation_id} paid, slot {reservation.slot_id} booked")

        result.meeting_link = await self._create_meeting(reservation_id)
        result.email_sent = await self._send_confirmation(reservation_id)
        return result

    async def _create_meeting(self, reservation_id: int) -> Optional[str]:
        reservation = self.reservations.get_reservation_by_id(self.db, reservation_id, with_relations=True)
        slot, service = reservation.slot, reservation.service
        if not slot or not service:
            logger.error(f"❌ Reservation {reservation_id} is missing its slot or service, no meeting created")
            return None

        try:
            link = await self.scheduler.create_meeting(
                slot.start,
                meeting_duration(service, slot),
                f"Reservation: {service.title}",
                [reservation.customer_email, service.mentor_email],
            )
        except Exception as e:
            logger.error(f"❌ Meeting creation failed for reservation {reservation_id}: {e}")
            return None

        self.reservations.update_reservation(self.db, reservation, meeting_link=link)
        logger.info(f"🎥 Meeting link saved for reservation {reservation_id}")
        return link

    async def _send_confirmation(self, reservation_id: int) -> bool:
        reservation = self.reservations.get_reservation_by_id(self.db, reservation_id, with_relations=True)
        if not reservation.slot or not reservation.service:
            logger.error(f"❌ Reservation {reservation_id} is missing its slot or service, no email sent")
            return False

        logger.info(f"📧 Preparing confirmation email for {reservation.customer_email}")
        try:
            await self.notifier.send_reservation_confirmation(
                to=reservation.customer_email,
                first_name=reservation.first_name,
                service_title=reservation.service.title or "",
                start=reservation.slot.start,
                meeting_link=reservation.meeting_link,
            )
        except Exception as e:
            logger.error(f"❌ Confirmation email failed for reservation {reservation_id}: {e}")
            return False

        logger.info(f"✉️ Confirmation email sent to {reservation.customer_email}")
        return True
