"""Service catalog router - public read access to bookable services"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Service
from .repository import ServiceRepository
from .schemas import ServiceResponse

router = APIRouter(prefix="/api/services", tags=["Services"])


def service_response(service: Service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        title=service.title,
        description=service.description,
        duration=service.duration,
        price=service.price,
        mentorEmail=service.mentor_email,
    )


@router.get("", response_model=list[ServiceResponse])
async def list_services(db: Session = Depends(get_db)):
    """List the services customers can book"""
    return [service_response(s) for s in ServiceRepository.get_services(db)]
