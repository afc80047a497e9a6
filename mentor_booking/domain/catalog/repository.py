"""Service catalog repository - Database operations for mentoring services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_services(db: Session) -> list[Service]:
        return db.query(Service).order_by(Service.id.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_service_by_title(db: Session, title: str) -> Optional[Service]:
        return db.query(Service).filter(Service.title == title).first()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
