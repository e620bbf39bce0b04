from __future__ import annotations

from datetime import date

import pytest
from starlette.testclient import TestClient

from app.core.auth import create_session_token
from app.core.config import settings
from app.main import app
from app.models.employee import Department, Employee, EmploymentStatus
from app.services.legacy_store import LegacyPayloadStore
from app.services.record_store import RecordStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path):
    original = {
        "STORE_URL": settings.STORE_URL,
        "LEGACY_DATA_DIR": settings.LEGACY_DATA_DIR,
        "OPENAI_ENDPOINT": settings.OPENAI_ENDPOINT,
        "OPENAI_API_KEY": settings.OPENAI_API_KEY,
    }
    settings.STORE_URL = f"sqlite:///{tmp_path / 'chronos.db'}"
    settings.LEGACY_DATA_DIR = str(tmp_path / "legacy")
    settings.OPENAI_ENDPOINT = ""
    settings.OPENAI_API_KEY = ""
    yield
    for name, value in original.items():
        setattr(settings, name, value)


@pytest.fixture
def make_employee():
    def _make(
        employee_id: str = "e-1",
        *,
        full_name: str = "Ada Lovelace",
        role: str = "Engineer",
        department: Department = Department.ENGINEERING,
        join_date: date = date(2020, 1, 15),
        leave_date: date | None = None,
        status: EmploymentStatus = EmploymentStatus.ACTIVE,
        bio: str = "",
        skills: list[str] | None = None,
    ) -> Employee:
        return Employee(
            id=employee_id,
            full_name=full_name,
            role=role,
            department=department,
            join_date=join_date,
            leave_date=leave_date,
            status=status,
            bio=bio,
            skills=skills or [],
            avatar_url=f"https://picsum.photos/seed/{employee_id}/200/200",
        )

    return _make


@pytest.fixture
def record_store(tmp_path):
    return RecordStore(f"sqlite:///{tmp_path / 'store.db'}")


@pytest.fixture
def legacy_store(tmp_path):
    return LegacyPayloadStore(tmp_path / "legacy-kv")


@pytest.fixture
def admin_token():
    token, _ = create_session_token(settings.SESSION_SECRET, ttl_minutes=5)
    return token


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def authenticated_client(admin_token):
    with TestClient(app) as c:
        c.headers["Authorization"] = f"Bearer {admin_token}"
        yield c
