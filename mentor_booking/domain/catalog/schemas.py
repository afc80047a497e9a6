"""Service catalog schemas"""

from typing import Optional

from pydantic import BaseModel


class ServiceResponse(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    price: Optional[float] = None
    mentorEmail: str


class ServiceSeed(BaseModel):
    """One entry of the services seed file"""

    title: str
    description: Optional[str] = None
    duration: int
    price: float
    mentorEmail: str
