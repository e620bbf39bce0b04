"""JSON backup format: a pretty-printed array of employee documents."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date

from pydantic import TypeAdapter, ValidationError

from app.models.employee import Employee

BACKUP_INDENT = 2

_employee_list = TypeAdapter(list[Employee])


class InvalidPayloadError(Exception):
    pass


def _load_array(raw: str | bytes) -> list:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidPayloadError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise InvalidPayloadError("Payload must be a JSON array of employee records")
    return data


def parse_employee_payload(raw: str | bytes) -> list[Employee]:
    """Parse a serialized employee array.

    Raises InvalidPayloadError when the text is not JSON, the top-level value
    is not an array, a record does not validate, or two records share an id.
    """
    data = _load_array(raw)

    try:
        employees = _employee_list.validate_python(data)
    except ValidationError as e:
        raise InvalidPayloadError(f"Payload contains invalid records: {e.error_count()} error(s)") from e

    ensure_unique_ids(employees)
    return employees


def parse_legacy_payload(raw: str | bytes) -> tuple[list[Employee], list[str]]:
    """Parse the legacy array record by record.

    Returns the valid records and a description of every skipped one. Only a
    payload that is not a JSON array raises InvalidPayloadError. A repeated id
    keeps its first occurrence.
    """
    employees: list[Employee] = []
    skipped: list[str] = []
    seen: set[str] = set()

    for index, item in enumerate(_load_array(raw)):
        try:
            employee = Employee.model_validate(item)
        except ValidationError as e:
            record_id = item.get("id") if isinstance(item, dict) else None
            skipped.append(f"record {index} (id={record_id}): {e.error_count()} error(s)")
            continue
        if employee.id in seen:
            skipped.append(f"record {index} (id={employee.id}): duplicate id")
            continue
        seen.add(employee.id)
        employees.append(employee)

    return employees, skipped


def ensure_unique_ids(employees: Sequence[Employee]) -> None:
    seen: set[str] = set()
    for employee in employees:
        if employee.id in seen:
            raise InvalidPayloadError(f"Duplicate employee id in payload: {employee.id}")
        seen.add(employee.id)


def serialize_employees(employees: Sequence[Employee]) -> str:
    documents = [e.to_document() for e in employees]
    return json.dumps(documents, indent=BACKUP_INDENT, ensure_ascii=False)


def backup_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"chronos_backup_{today.isoformat()}.json"
