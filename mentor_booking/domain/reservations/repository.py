"""Reservation repository - Database operations for reservations"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Reservation


class ReservationRepository:
    """Repository for reservation database operations"""

    @staticmethod
    def get_reservations(db: Session) -> list[Reservation]:
        """Get all reservations with their service and slot, newest first"""
        return (
            db.query(Reservation)
            .options(joinedload(Reservation.service), joinedload(Reservation.slot))
            .order_by(Reservation.created_at.desc(), Reservation.id.desc())
            .all()
        )

    @staticmethod
    def get_reservation_by_id(
        db: Session, reservation_id: int, with_relations: bool = False
    ) -> Optional[Reservation]:
        query = db.query(Reservation)
        if with_relations:
            query = query.options(joinedload(Reservation.service), joinedload(Reservation.slot))
        return query.filter(Reservation.id == reservation_id).first()

    @staticmethod
    def create_reservation(db: Session, **reservation_data) -> Reservation:
        reservation = Reservation(**reservation_data)
        db.add(reservation)
        db.commit()
        db.refresh(reservation)
        return reservation

    @staticmethod
    def update_reservation(db: Session, reservation: Reservation, **updates) -> Reservation:
        """Update a reservation with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(reservation, key):
                setattr(reservation, key, value)

        db.commit()
        db.refresh(reservation)
        return reservation

    @staticmethod
    def delete_reservation(db: Session, reservation: Reservation) -> None:
        db.delete(reservation)
        db.commit()
