from __future__ import annotations

import logging

from fastapi import Header, HTTPException, status

from app.core.auth import validate_session_token
from app.core.config import settings
from app.models.auth import AdminSession

logger = logging.getLogger(__name__)


async def require_admin(authorization: str | None = Header(None)) -> AdminSession:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]

    try:
        payload = validate_session_token(token, settings.SESSION_SECRET)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Session validation error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return AdminSession(session_id=payload["sub"], role=payload["role"], expires_at=payload["exp"])
