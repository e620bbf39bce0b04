from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import require_admin
from app.models.auth import AdminSession
from app.models.employee import Employee, EmployeeDraft, SaveResult
from app.services import aggregation
from app.services.directory_service import ImportInProgressError, directory_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[Employee])
async def list_employees(q: str | None = None):
    return aggregation.search(directory_service.employees(), q)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(employee_id: str):
    employee = directory_service.get(employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return employee


@router.post("", response_model=SaveResult, status_code=status.HTTP_201_CREATED)
async def create_employee(
    draft: EmployeeDraft,
    admin: AdminSession = Depends(require_admin),  # noqa: B008
):
    try:
        result = await directory_service.create(draft)
    except ImportInProgressError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err

    logger.info("Employee %s created (session=%s persisted=%s)", result.employee.id, admin.session_id, result.persisted)
    return result


@router.put("/{employee_id}", response_model=SaveResult)
async def replace_employee(
    employee_id: str,
    draft: EmployeeDraft,
    admin: AdminSession = Depends(require_admin),  # noqa: B008
):
    employee = Employee(id=employee_id, **draft.model_dump())
    try:
        result = await directory_service.save(employee)
    except ImportInProgressError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err

    logger.info("Employee %s saved (session=%s persisted=%s)", employee_id, admin.session_id, result.persisted)
    return result
