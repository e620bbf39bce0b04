from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.services.directory_service import directory_service
from app.services.generation_service import generation_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.resolved_log_level())
    try:
        await directory_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize DirectoryService, continuing without records")
    try:
        await generation_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize GenerationService, continuing without AI text")
    yield
    await directory_service.close()
    await generation_service.close()


app = FastAPI(
    title="Chronos API",
    description="Employee directory: timeline, gallery and talent statistics",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Chronos API"}
