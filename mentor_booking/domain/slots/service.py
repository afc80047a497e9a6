"""Slot service - Business logic for slot administration and availability queries"""

import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import SLOT_FREE, Slot
from ...shared.validators import is_blank, parse_iso_date
from ..catalog.repository import ServiceRepository
from .repository import SlotRepository
from .schemas import SlotCreate, SlotDaySummary, SlotUpdate

logger = logging.getLogger(__name__)


class SlotService:
    """Service layer for slot business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SlotRepository()

    def get_slots(self) -> list[Slot]:
        return self.repo.get_slots(self.db)

    def get_slot(self, slot_id: int) -> Slot:
        slot = self.repo.get_slot_by_id(self.db, slot_id)
        if not slot:
            raise HTTPException(status_code=404, detail="Slot not found.")
        return slot

    def _check_service(self, service_id: Optional[int]) -> None:
        if service_id is not None and not ServiceRepository.get_service_by_id(self.db, service_id):
            raise HTTPException(status_code=400, detail="Unknown service.")

    def _check_window(self, start: Optional[datetime], end: Optional[datetime]) -> None:
        if start and end and end <= start:
            raise HTTPException(status_code=400, detail="Slot end must be after start.")

    def create_slot(self, data: SlotCreate) -> Slot:
        if is_blank(data.start):
            raise HTTPException(status_code=400, detail="Missing start.")
        self._check_window(data.start, data.end)
        self._check_service(data.serviceId)

        slot = self.repo.create_slot(
            self.db,
            start=data.start,
            end=data.end,
            service_id=data.serviceId,
            status=SLOT_FREE,
        )
        logger.info(f"🗓️ Slot {slot.id} created for {slot.start.isoformat()}")
        return slot

    def update_slot(self, slot_id: int, data: SlotUpdate) -> Slot:
        slot = self.get_slot(slot_id)
        fields = data.model_dump(exclude_unset=True)
        # start and status are required columns, so null leaves them unchanged
        updates = {
            "start": fields.get("start") or slot.start,
            "status": fields.get("status") or slot.status,
        }
        if "end" in fields:
            updates["end"] = fields["end"]
        if "serviceId" in fields:
            self._check_service(fields["serviceId"])
            updates["service_id"] = fields["serviceId"]
        self._check_window(updates["start"], updates.get("end", slot.end))

        slot = self.repo.update_slot(self.db, slot, **updates)
        logger.info(f"🗓️ Slot {slot.id} updated (status={slot.status})")
        return slot

    def delete_slot(self, slot_id: int) -> None:
        slot = self.get_slot(slot_id)
        if self.repo.has_reservations(self.db, slot_id):
            raise HTTPException(status_code=409, detail="Slot has reservations; delete them first.")
        self.repo.delete_slot(self.db, slot)
        logger.info(f"🗑️ Slot {slot_id} deleted")

    def get_free_slot_summary(self) -> list[SlotDaySummary]:
        """Free slot counts per UTC day, ordered by day"""
        counts = Counter(slot.start.date().isoformat() for slot in self.repo.get_free_slots(self.db))
        return [SlotDaySummary(date=day, availableCount=count) for day, count in sorted(counts.items())]

    def get_free_slots_on(self, date_str: Optional[str]) -> list[Slot]:
        """Free slots starting on the given UTC day, sorted by start"""
        if is_blank(date_str):
            raise HTTPException(status_code=400, detail="Missing date parameter.")
        try:
            day = parse_iso_date(date_str)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        day_start = datetime(day.year, day.month, day.day)
        return self.repo.get_free_slots_between(self.db, day_start, day_start + timedelta(days=1))
