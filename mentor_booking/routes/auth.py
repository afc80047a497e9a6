import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..auth import authenticate_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest):
    """Exchange the admin username/password for a bearer token"""
    if not data.username or not data.password:
        logger.info("Login rejected: missing username/password")
        raise HTTPException(status_code=400, detail="Missing fields.")

    token = authenticate_admin(data.username, data.password)
    if not token:
        logger.warning(f"🚫 Invalid admin credentials for user '{data.username}'")
        raise HTTPException(status_code=401, detail="Invalid credentials.")

    logger.info("✅ Admin login successful")
    return TokenResponse(token=token)
