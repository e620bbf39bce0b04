from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.dependencies import require_admin
from app.models.auth import AdminSession
from app.models.employee import Department
from app.services.directory_service import directory_service
from app.services.generation_service import generation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate", tags=["generate"])


class BioRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    department: Department
    join_date: date
    skills: list[str] = []
    language: str = Field(default="en", pattern=r"^(en|zh)$")


class YearThemeRequest(BaseModel):
    year: int = Field(..., ge=1900, le=2200)
    language: str = Field(default="en", pattern=r"^(en|zh)$")


class GeneratedText(BaseModel):
    text: str


@router.post("/bio", response_model=GeneratedText)
async def generate_bio(
    request: BioRequest,
    admin: AdminSession = Depends(require_admin),  # noqa: B008
):
    text = await generation_service.generate_bio(
        name=request.full_name,
        role=request.role,
        department=request.department.value,
        join_date=request.join_date,
        skills=request.skills,
        language=request.language,
    )
    return GeneratedText(text=text)


@router.post("/year-theme", response_model=GeneratedText)
async def year_theme(request: YearThemeRequest):
    staff = [
        (e.role, e.department.value)
        for e in directory_service.employees()
        if e.join_date.year == request.year
    ]
    logger.info("Year theme request year=%d staff=%d", request.year, len(staff))
    text = await generation_service.analyze_year(request.year, staff, language=request.language)
    return GeneratedText(text=text)
