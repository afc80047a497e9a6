"""Slot repository - Database operations for slots"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import SLOT_BOOKED, SLOT_FREE, Reservation, Slot


class SlotRepository:
    """Repository for slot database operations"""

    @staticmethod
    def get_slots(db: Session) -> list[Slot]:
        """Get all slots, earliest first"""
        return db.query(Slot).order_by(Slot.start.asc(), Slot.id.asc()).all()

    @staticmethod
    def get_slot_by_id(db: Session, slot_id: int) -> Optional[Slot]:
        return db.query(Slot).filter(Slot.id == slot_id).first()

    @staticmethod
    def get_free_slots(db: Session) -> list[Slot]:
        return db.query(Slot).filter(Slot.status == SLOT_FREE).order_by(Slot.start.asc()).all()

    @staticmethod
    def get_free_slots_between(db: Session, start: datetime, end: datetime) -> list[Slot]:
        """Free slots with start in [start, end), sorted ascending by start"""
        return (
            db.query(Slot)
            .filter(Slot.status == SLOT_FREE, Slot.start >= start, Slot.start < end)
            .order_by(Slot.start.asc(), Slot.id.asc())
            .all()
        )

    @staticmethod
    def create_slot(db: Session, **slot_data) -> Slot:
        slot = Slot(**slot_data)
        db.add(slot)
        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def update_slot(db: Session, slot: Slot, **updates) -> Slot:
        """Update a slot with provided fields; None clears nullable columns"""
        for key, value in updates.items():
            if hasattr(slot, key):
                setattr(slot, key, value)

        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def delete_slot(db: Session, slot: Slot) -> None:
        db.delete(slot)
        db.commit()

    @staticmethod
    def has_reservations(db: Session, slot_id: int) -> bool:
        return db.query(Reservation.id).filter(Reservation.slot_id == slot_id).first() is not None

    @staticmethod
    def hold_slot(db: Session, slot_id: int) -> bool:
        """
        Atomically move a slot from free to booked.
        Returns False when the slot is missing or already booked.
        """
        updated = (
            db.query(Slot)
            .filter(Slot.id == slot_id, Slot.status == SLOT_FREE)
            .update({Slot.status: SLOT_BOOKED}, synchronize_session=False)
        )
        db.commit()
        return updated == 1

    @staticmethod
    def set_status(db: Session, slot_id: int, status: str) -> bool:
        updated = (
            db.query(Slot)
            .filter(Slot.id == slot_id)
            .update({Slot.status: status}, synchronize_session=False)
        )
        db.commit()
        return updated == 1
