import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import ADMIN_PASS, ADMIN_USER
from .security_utils import constant_time_compare, create_jwt_token, verify_jwt_token

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# auto_error=False so a missing header answers 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)


def authenticate_admin(username: str, password: str) -> Optional[str]:
    """Return a signed admin token if the credentials match the configured admin login"""
    user_ok = constant_time_compare(username, ADMIN_USER)
    pass_ok = constant_time_compare(password, ADMIN_PASS)
    if not (user_ok and pass_ok):
        return None
    return create_jwt_token({"role": ADMIN_ROLE})


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Require a valid admin bearer token"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        logger.warning("🚫 Admin request without bearer token")
        raise HTTPException(status_code=401, detail="Not authorized.")

    payload = verify_jwt_token(credentials.credentials)
    if not payload or payload.get("role") != ADMIN_ROLE:
        logger.warning("🚫 Admin request with invalid or expired token")
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    return payload
