"""Pure derivations of the timeline, gallery and statistics views.

Nothing here performs I/O or mutates its input. Functions that depend on the
current date accept ``today`` so callers and tests can pin it.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import date

from app.models.employee import Employee, EmploymentStatus
from app.models.stats import DepartmentCount, StatsOverview, SummaryStats, TimelineGroup, TrendPoint

TREND_YEARS = 10
DAYS_PER_YEAR = 365


def group_by_year(employees: Sequence[Employee]) -> list[TimelineGroup]:
    groups: dict[int, list[Employee]] = defaultdict(list)
    for employee in employees:
        groups[employee.join_date.year].append(employee)

    return [
        TimelineGroup(year=year, employees=sorted(groups[year], key=lambda e: e.join_date))
        for year in sorted(groups)
    ]


def department_distribution(employees: Sequence[Employee]) -> list[DepartmentCount]:
    counts = Counter(e.department for e in employees)
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0].value))
    return [DepartmentCount(name=department, value=count) for department, count in ordered]


def hiring_trend(
    employees: Sequence[Employee],
    today: date | None = None,
    years: int = TREND_YEARS,
) -> list[TrendPoint]:
    today = today or date.today()
    hires = Counter(e.join_date.year for e in employees)
    first_year = today.year - years + 1
    return [TrendPoint(year=year, hires=hires.get(year, 0)) for year in range(first_year, today.year + 1)]


def average_tenure_years(employees: Sequence[Employee], today: date | None = None) -> float:
    if not employees:
        return 0.0
    today = today or date.today()
    total_days = sum(((e.leave_date or today) - e.join_date).days for e in employees)
    return total_days / DAYS_PER_YEAR / len(employees)


def company_age_years(employees: Sequence[Employee], today: date | None = None) -> int:
    if not employees:
        return 0
    today = today or date.today()
    return today.year - min(e.join_date.year for e in employees)


def summary_stats(employees: Sequence[Employee], today: date | None = None) -> SummaryStats:
    today = today or date.today()
    return SummaryStats(
        total=len(employees),
        active=sum(1 for e in employees if e.status == EmploymentStatus.ACTIVE),
        average_tenure_years=average_tenure_years(employees, today),
        company_age_years=company_age_years(employees, today),
    )


def stats_overview(employees: Sequence[Employee], today: date | None = None) -> StatsOverview:
    today = today or date.today()
    return StatsOverview(
        summary=summary_stats(employees, today),
        departments=department_distribution(employees),
        trend=hiring_trend(employees, today),
        timeline=group_by_year(employees),
    )


def search(employees: Sequence[Employee], term: str | None) -> list[Employee]:
    """Case-insensitive match on name or role. A blank term matches everything."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(employees)
    return [e for e in employees if needle in e.full_name.lower() or needle in e.role.lower()]
