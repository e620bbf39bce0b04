"""Derived view models computed from the employee collection. Never persisted."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.employee import Department, Employee


class _ViewModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimelineGroup(_ViewModel):
    """Employees who joined in one calendar year, oldest join first."""

    year: int
    employees: list[Employee]


class DepartmentCount(_ViewModel):
    name: Department
    value: int


class TrendPoint(_ViewModel):
    year: int
    hires: int


class SummaryStats(_ViewModel):
    total: int
    active: int
    average_tenure_years: float
    company_age_years: int


class StatsOverview(_ViewModel):
    summary: SummaryStats
    departments: list[DepartmentCount]
    trend: list[TrendPoint]
    timeline: list[TimelineGroup]
