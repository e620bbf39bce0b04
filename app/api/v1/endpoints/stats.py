from __future__ import annotations

from fastapi import APIRouter

from app.models.stats import DepartmentCount, StatsOverview, SummaryStats, TimelineGroup, TrendPoint
from app.services import aggregation
from app.services.directory_service import directory_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsOverview)
async def overview():
    return aggregation.stats_overview(directory_service.employees())


@router.get("/timeline", response_model=list[TimelineGroup])
async def timeline(q: str | None = None):
    return aggregation.group_by_year(aggregation.search(directory_service.employees(), q))


@router.get("/departments", response_model=list[DepartmentCount])
async def departments():
    return aggregation.department_distribution(directory_service.employees())


@router.get("/trend", response_model=list[TrendPoint])
async def trend():
    return aggregation.hiring_trend(directory_service.employees())


@router.get("/summary", response_model=SummaryStats)
async def summary():
    return aggregation.summary_stats(directory_service.employees())
