from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import create_session_token, verify_password
from app.core.config import settings
from app.core.dependencies import require_admin
from app.models.auth import AdminSession, LoginRequest, SessionToken

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionToken)
async def login(request: LoginRequest):
    if not verify_password(request.password, settings.ADMIN_PASSWORD_HASH):
        logger.info("Admin login rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
        )

    token, expires_in = create_session_token(settings.SESSION_SECRET, settings.SESSION_TTL_MINUTES)
    logger.info("Admin session granted")
    return SessionToken(access_token=token, expires_in=expires_in)


@router.get("/session", response_model=AdminSession)
async def current_session(admin: AdminSession = Depends(require_admin)):  # noqa: B008
    return admin
