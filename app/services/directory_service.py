"""In-memory employee collection for the running service, backed by the RecordStore."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Sequence

from app.core.config import Settings
from app.models.employee import Employee, EmployeeDraft, SaveResult
from app.services.backup import ensure_unique_ids, parse_employee_payload, serialize_employees
from app.services.legacy_store import LegacyPayloadStore
from app.services.migration import MigrationAdapter
from app.services.record_store import RecordStore, RecordStoreError
from app.services.seed_data import default_employees

logger = logging.getLogger(__name__)

SAVE_FAILED_WARNING = (
    "The change is visible in this session but could not be written to storage. "
    "Check available disk space and try again."
)


class ImportInProgressError(Exception):
    pass


class DirectoryService:
    """Owns the authoritative record list for the session.

    Writes update memory first and then await the store. A failed ``save``
    keeps the in-memory change and reports ``persisted=False``; a failed
    import leaves memory untouched. Store writes run one at a time under
    ``_write_lock``, so an import waits for saves already in flight and
    new saves are refused until it finishes.
    """

    def __init__(self) -> None:
        self.store: RecordStore | None = None
        self.migration: MigrationAdapter | None = None
        self.initialized = False
        self.loaded = False
        self.importing = False
        self._employees: list[Employee] = []
        self._write_lock = asyncio.Lock()

    def configure(self, store: RecordStore, legacy: LegacyPayloadStore) -> None:
        self.store = store
        self.migration = MigrationAdapter(store, legacy)
        self.loaded = False
        self._employees = []
        self._write_lock = asyncio.Lock()

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        self.configure(
            RecordStore(settings.resolved_store_url()),
            LegacyPayloadStore(settings.resolved_legacy_dir()),
        )
        self.initialized = True
        await self.load()
        logger.info("DirectoryService initialized with %d records", len(self._employees))

    async def close(self) -> None:
        if self.store:
            await self.store.close()
        self.store = None
        self.migration = None
        self.initialized = False
        self.loaded = False
        self.importing = False
        self._employees = []

    async def load(self, seed_defaults: Sequence[Employee] | None = None) -> list[Employee]:
        if self.loaded:
            return self.employees()
        if self.migration is None:
            raise RuntimeError("DirectoryService not initialized")

        seeds = list(seed_defaults) if seed_defaults is not None else default_employees()
        try:
            self._employees = await self.migration.load_initial(seeds)
        except RecordStoreError:
            logger.exception("Failed to load records, starting with an empty collection")
            self._employees = []
        self.loaded = True
        return self.employees()

    def employees(self) -> list[Employee]:
        return list(self._employees)

    def get(self, employee_id: str) -> Employee | None:
        for employee in self._employees:
            if employee.id == employee_id:
                return employee
        return None

    async def create(self, draft: EmployeeDraft) -> SaveResult:
        employee_id = str(uuid.uuid4())
        data = draft.model_dump()
        if not data.get("avatar_url"):
            data["avatar_url"] = f"https://picsum.photos/seed/{employee_id}/200/200"
        return await self.save(Employee(id=employee_id, **data))

    async def save(self, employee: Employee) -> SaveResult:
        store = self._require_store()
        if self.importing:
            raise ImportInProgressError("A backup restore is in progress; try again when it finishes")

        async with self._write_lock:
            for index, current in enumerate(self._employees):
                if current.id == employee.id:
                    self._employees[index] = employee
                    break
            else:
                self._employees.append(employee)

            try:
                await store.put(employee)
            except RecordStoreError:
                logger.warning("Record %s kept in memory but not persisted", employee.id)
                return SaveResult(employee=employee, persisted=False, warning=SAVE_FAILED_WARNING)

        return SaveResult(employee=employee)

    async def import_all(self, employees: Sequence[Employee]) -> int:
        store = self._require_store()
        if self.importing:
            raise ImportInProgressError("Another backup restore is already running")

        records = list(employees)
        ensure_unique_ids(records)

        self.importing = True
        try:
            async with self._write_lock:
                await store.put_all(records)
                self._employees = records
        finally:
            self.importing = False

        logger.info("Restored %d records from backup", len(records))
        return len(records)

    async def import_payload(self, raw: str | bytes) -> int:
        employees = parse_employee_payload(raw)
        return await self.import_all(employees)

    def export_all(self) -> str:
        return serialize_employees(self._employees)

    def _require_store(self) -> RecordStore:
        if self.store is None:
            raise RuntimeError("DirectoryService not initialized")
        return self.store


directory_service = DirectoryService()
