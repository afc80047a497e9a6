"""Slot routers - admin slot management and public availability"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import Slot
from ...shared.validators import as_utc
from .schemas import SlotCreate, SlotDaySummary, SlotResponse, SlotUpdate
from .service import SlotService

logger = logging.getLogger(__name__)

admin_router = APIRouter(
    prefix="/api/admin/slots", tags=["Admin"], dependencies=[Depends(get_current_admin)]
)
public_router = APIRouter(prefix="/api/slots", tags=["Slots"])


def get_slot_service(db: Session = Depends(get_db)) -> SlotService:
    """Dependency injection for SlotService"""
    return SlotService(db)


def slot_response(slot: Slot) -> SlotResponse:
    return SlotResponse(
        id=slot.id,
        serviceId=slot.service_id,
        start=as_utc(slot.start),
        end=as_utc(slot.end),
        status=slot.status,
    )


# ============================================================================
# ADMIN
# ============================================================================


@admin_router.get("", response_model=list[SlotResponse])
async def list_slots(service: SlotService = Depends(get_slot_service)):
    """Get all slots"""
    return [slot_response(s) for s in service.get_slots()]


@admin_router.post("", response_model=SlotResponse, status_code=201)
async def create_slot(data: SlotCreate, service: SlotService = Depends(get_slot_service)):
    """Create a free slot"""
    return slot_response(service.create_slot(data))


@admin_router.put("/{slot_id}", response_model=SlotResponse)
async def update_slot(
    slot_id: int,
    data: SlotUpdate,
    service: SlotService = Depends(get_slot_service),
):
    """Update a slot's window, service or status"""
    return slot_response(service.update_slot(slot_id, data))


@admin_router.delete("/{slot_id}")
async def delete_slot(slot_id: int, service: SlotService = Depends(get_slot_service)):
    service.delete_slot(slot_id)
    return {"message": "Slot deleted."}


# ============================================================================
# PUBLIC
# ============================================================================


@public_router.get("/summary", response_model=list[SlotDaySummary])
async def free_slot_summary(service: SlotService = Depends(get_slot_service)):
    """Number of free slots per day"""
    return service.get_free_slot_summary()


@public_router.get("", response_model=list[SlotResponse])
async def free_slots_on_day(
    date: Optional[str] = Query(None, description="Day in YYYY-MM-DD"),
    service: SlotService = Depends(get_slot_service),
):
    """Free slots for one day, sorted by start time"""
    return [slot_response(s) for s in service.get_free_slots_on(date)]
