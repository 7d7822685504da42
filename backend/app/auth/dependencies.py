"""Authentication dependencies for FastAPI."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "ADMIN"


def _invalid_token() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Validate the CMS JWT token.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Dict with username and role from token

    Raises:
        HTTPException: 401 if token is missing, invalid or expired
    """
    if credentials is None:
        logger.warning("Request without bearer token")
        raise _invalid_token()

    settings = get_settings()

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _invalid_token()

    return {
        "username": payload.get("username"),
        "role": payload.get("role"),
    }


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """Allow only administrators through; everyone else gets a 401."""
    if current_user.get("role") != ADMIN_ROLE:
        logger.warning(f"Non-admin access attempt by {current_user.get('username')}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return current_user
