"""Admin password gate and session tokens."""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
import uuid
from typing import Any

from fastapi import HTTPException, status
from jose import jwt
from jose.constants import Algorithms
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

logger = logging.getLogger("admin_auth")

_TOKEN_ALGORITHM = Algorithms.HS256
_TOKEN_AUDIENCE = "chronos-admin"


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(candidate: str, reference_digest: str) -> bool:
    return hmac.compare_digest(hash_password(candidate), reference_digest.lower())


def create_session_token(secret: str, ttl_minutes: int) -> tuple[str, int]:
    now = int(time.time())
    expires_in = ttl_minutes * 60
    claims = {
        "sub": f"session-{uuid.uuid4()}",
        "role": "admin",
        "aud": _TOKEN_AUDIENCE,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=_TOKEN_ALGORITHM), expires_in


def validate_session_token(token: str, secret: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[_TOKEN_ALGORITHM],
            audience=_TOKEN_AUDIENCE,
            options={"require_exp": True, "require_sub": True, "require_aud": True},
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has expired",
        ) from e
    except (JWTClaimsError, JWTError) as e:
        logger.info("Rejected session token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token",
        ) from e

    if payload.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin session required",
        )
    return payload
