"""Employee record models shared by the store, the API and backup files."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Department(str, Enum):
    ENGINEERING = "engineering"
    PRODUCT = "product"
    DESIGN = "design"
    SALES = "sales"
    HR = "hr"
    LEADERSHIP = "leadership"
    OPERATIONS = "operations"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    ALUMNUS = "alumnus"
    ON_LEAVE = "on-leave"


# Display labels stored by the first version of the front end.
_LEGACY_DEPARTMENT_LABELS: dict[str, Department] = {
    "技术部": Department.ENGINEERING,
    "产品部": Department.PRODUCT,
    "设计部": Department.DESIGN,
    "销售部": Department.SALES,
    "人事行政": Department.HR,
    "总经办": Department.LEADERSHIP,
    "运营部": Department.OPERATIONS,
}

_LEGACY_STATUS_LABELS: dict[str, EmploymentStatus] = {
    "在职": EmploymentStatus.ACTIVE,
    "离职/校友": EmploymentStatus.ALUMNUS,
    "休假中": EmploymentStatus.ON_LEAVE,
}


class EmployeeDraft(BaseModel):
    """Employee fields as submitted by the editor form, before an id exists."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    department: Department
    join_date: date
    leave_date: date | None = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE
    bio: str = ""
    skills: list[str] = []
    avatar_url: str | None = None
    email: str | None = None

    @field_validator("department", mode="before")
    @classmethod
    def _normalize_department(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_DEPARTMENT_LABELS.get(value, value)
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_STATUS_LABELS.get(value, value)
        return value

    @field_validator("leave_date", mode="before")
    @classmethod
    def _blank_leave_date(cls, value: object) -> object:
        # A cleared date input is submitted as an empty string.
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def _check_leave_after_join(self) -> EmployeeDraft:
        if self.leave_date is not None and self.leave_date < self.join_date:
            raise ValueError("leaveDate must be on or after joinDate")
        return self


class Employee(EmployeeDraft):
    """A persisted employee record, keyed by ``id``."""

    id: str = Field(..., min_length=1)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SaveResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    employee: Employee
    persisted: bool = True
    warning: str | None = None


class ImportResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    imported: int
    message: str
