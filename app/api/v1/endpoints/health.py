from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.services.directory_service import directory_service
from app.services.generation_service import generation_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    try:
        if directory_service.initialized and directory_service.store is not None:
            ok = await directory_service.store.check_connection()
            services["record_store"] = "ok" if ok else "error"
        else:
            services["record_store"] = "not_initialized"
    except Exception:
        services["record_store"] = "error"

    services["openai"] = "ok" if generation_service.initialized else "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "records": len(directory_service.employees()),
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": directory_service.loaded}
