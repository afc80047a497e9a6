"""Reservation routers - public booking and admin reservation management"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import Reservation
from ...services import get_payment_gateway
from ...services.base import PaymentGateway
from ...shared.validators import as_utc
from ..catalog.router import service_response
from ..slots.router import slot_response
from .schemas import CheckoutResponse, ReservationCreate, ReservationResponse
from .service import ReservationService

logger = logging.getLogger(__name__)

public_router = APIRouter(prefix="/api/reservations", tags=["Reservations"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


def get_reservation_service(
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> ReservationService:
    """Dependency injection for ReservationService"""
    return ReservationService(db, gateway)


def reservation_response(reservation: Reservation) -> ReservationResponse:
    return ReservationResponse(
        id=reservation.id,
        serviceId=reservation.service_id,
        slotId=reservation.slot_id,
        service=service_response(reservation.service) if reservation.service else None,
        slot=slot_response(reservation.slot) if reservation.slot else None,
        firstName=reservation.first_name,
        lastName=reservation.last_name,
        phone=reservation.phone,
        customerEmail=reservation.customer_email,
        status=reservation.status,
        meetingLink=reservation.meeting_link,
        stripeSessionId=reservation.stripe_session_id,
        createdAt=as_utc(reservation.created_at),
    )


@public_router.post("", response_model=CheckoutResponse)
def create_reservation(
    data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Reserve a free slot and return the hosted checkout URL"""
    return CheckoutResponse(checkoutUrl=service.create_reservation(data))


@admin_router.get("/reservations", response_model=list[ReservationResponse])
async def list_reservations(service: ReservationService = Depends(get_reservation_service)):
    """All reservations with their service and slot"""
    return [reservation_response(r) for r in service.get_reservations()]


@admin_router.delete("/reservation/{reservation_id}")
@admin_router.delete("/reservations/{reservation_id}")
async def delete_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
):
    service.delete_reservation(reservation_id)
    return {"message": "Reservation deleted."}
