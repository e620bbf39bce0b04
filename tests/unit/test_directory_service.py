from __future__ import annotations

import asyncio
import json
from datetime import date
from unittest.mock import AsyncMock

import pytest

from app.core.config import settings
from app.models.employee import Department, EmployeeDraft
from app.services.backup import InvalidPayloadError, serialize_employees
from app.services.directory_service import (
    SAVE_FAILED_WARNING,
    DirectoryService,
    ImportInProgressError,
)
from app.services.record_store import RecordStoreError


@pytest.fixture
async def service(record_store, legacy_store, make_employee):
    svc = DirectoryService()
    svc.configure(record_store, legacy_store)
    await svc.load([make_employee("1"), make_employee("2", full_name="Grace Hopper")])
    yield svc
    await svc.close()


class TestLoad:
    @pytest.mark.anyio
    async def test_load_seeds_and_holds_records(self, service, record_store):
        assert [e.id for e in service.employees()] == ["1", "2"]
        assert len(await record_store.get_all()) == 2

    @pytest.mark.anyio
    async def test_load_runs_migration_once(self, service, make_employee):
        service.migration.load_initial = AsyncMock(return_value=[make_employee("other")])
        result = await service.load()
        assert [e.id for e in result] == ["1", "2"]
        service.migration.load_initial.assert_not_awaited()

    @pytest.mark.anyio
    async def test_load_without_configuration_raises(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            await DirectoryService().load()

    @pytest.mark.anyio
    async def test_store_failure_at_startup_leaves_empty_collection(self, record_store, legacy_store):
        svc = DirectoryService()
        svc.configure(record_store, legacy_store)
        svc.migration.load_initial = AsyncMock(side_effect=RecordStoreError("corrupt"))

        assert await svc.load() == []
        assert svc.loaded is True

    @pytest.mark.anyio
    async def test_initialize_uses_settings(self):
        svc = DirectoryService()
        await svc.initialize(settings)
        try:
            assert svc.initialized is True
            assert len(svc.employees()) == 6
        finally:
            await svc.close()
        assert svc.initialized is False
        assert svc.employees() == []


class TestSave:
    @pytest.mark.anyio
    async def test_save_replaces_existing_record(self, service, record_store, make_employee):
        updated = make_employee("2", full_name="Grace Brewster Hopper", role="Rear Admiral")

        result = await service.save(updated)

        assert result.persisted is True
        assert result.warning is None
        assert service.get("2") == updated
        assert len(service.employees()) == 2
        stored = {e.id: e for e in await record_store.get_all()}
        assert stored["2"].role == "Rear Admiral"

    @pytest.mark.anyio
    async def test_save_appends_new_record(self, service, make_employee):
        await service.save(make_employee("3"))
        assert [e.id for e in service.employees()] == ["1", "2", "3"]

    @pytest.mark.anyio
    async def test_storage_failure_keeps_in_memory_change(self, service, record_store, make_employee):
        record_store.put = AsyncMock(side_effect=RecordStoreError("quota exceeded"))

        result = await service.save(make_employee("3"))

        assert result.persisted is False
        assert result.warning == SAVE_FAILED_WARNING
        assert service.get("3") is not None

    @pytest.mark.anyio
    async def test_save_rejected_while_import_running(self, service, make_employee):
        service.importing = True
        with pytest.raises(ImportInProgressError):
            await service.save(make_employee("3"))
        assert service.get("3") is None

    @pytest.mark.anyio
    async def test_create_assigns_id_and_default_avatar(self, service):
        draft = EmployeeDraft(
            full_name="Linus Torvalds",
            role="Kernel Engineer",
            department=Department.ENGINEERING,
            join_date=date(2021, 4, 1),
        )

        result = await service.create(draft)

        assert result.employee.id not in ("1", "2")
        assert result.employee.avatar_url == f"https://picsum.photos/seed/{result.employee.id}/200/200"
        assert service.get(result.employee.id) == result.employee


class TestImportExport:
    @pytest.mark.anyio
    async def test_import_waits_for_save_in_flight(self, service, record_store, make_employee):
        release = asyncio.Event()
        real_put = record_store.put

        async def gated_put(employee):
            await release.wait()
            await real_put(employee)

        record_store.put = gated_put
        save_task = asyncio.create_task(service.save(make_employee("stale")))
        await asyncio.sleep(0)
        import_task = asyncio.create_task(service.import_all([make_employee("x")]))
        await asyncio.sleep(0)

        assert not import_task.done()
        assert service.importing is True
        with pytest.raises(ImportInProgressError):
            await service.save(make_employee("late"))

        release.set()
        assert (await save_task).persisted is True
        assert await import_task == 1

        assert [e.id for e in service.employees()] == ["x"]
        assert [e.id for e in await record_store.get_all()] == ["x"]

    @pytest.mark.anyio
    async def test_import_all_replaces_memory_and_store(self, service, record_store, make_employee):
        count = await service.import_all([make_employee("x"), make_employee("y")])

        assert count == 2
        assert [e.id for e in service.employees()] == ["x", "y"]
        assert sorted(e.id for e in await record_store.get_all()) == ["x", "y"]
        assert service.importing is False

    @pytest.mark.anyio
    async def test_import_store_failure_leaves_memory_untouched(self, service, record_store, make_employee):
        record_store.put_all = AsyncMock(side_effect=RecordStoreError("disk full"))

        with pytest.raises(RecordStoreError):
            await service.import_all([make_employee("x")])

        assert [e.id for e in service.employees()] == ["1", "2"]
        assert service.importing is False

    @pytest.mark.anyio
    async def test_import_rejects_non_array_payload(self, service, record_store):
        with pytest.raises(InvalidPayloadError, match="JSON array"):
            await service.import_payload(json.dumps({"employees": []}))

        assert [e.id for e in service.employees()] == ["1", "2"]
        assert sorted(e.id for e in await record_store.get_all()) == ["1", "2"]

    @pytest.mark.anyio
    async def test_import_rejects_duplicate_ids(self, service, make_employee):
        with pytest.raises(InvalidPayloadError, match="Duplicate"):
            await service.import_all([make_employee("x"), make_employee("x")])
        assert [e.id for e in service.employees()] == ["1", "2"]

    @pytest.mark.anyio
    async def test_export_then_import_restores_collection(self, service, make_employee):
        backup = service.export_all()
        await service.import_all([make_employee("temporary")])

        count = await service.import_payload(backup.encode("utf-8"))

        assert count == 2
        assert [e.id for e in service.employees()] == ["1", "2"]

    @pytest.mark.anyio
    async def test_export_is_pretty_printed_array(self, service):
        exported = service.export_all()
        assert exported == serialize_employees(service.employees())
        assert exported.startswith("[\n  {")
        assert [d["id"] for d in json.loads(exported)] == ["1", "2"]
