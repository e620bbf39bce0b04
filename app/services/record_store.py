"""Durable key-value store for employee records (SQLAlchemy over SQLite)."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy import JSON, String, create_engine, delete, select, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from app.models.employee import Employee

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class EmployeeRow(Base):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    # Whole record as its backup-format document; the store never patches fields.
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)


class RecordStoreError(Exception):
    pass


class RecordStore:
    def __init__(self, url: str) -> None:
        self.url = url
        self.engine: Engine | None = None
        self.initialized = False
        self._session_factory: sessionmaker[Session] | None = None
        self._init_lock = threading.Lock()

    async def initialize(self) -> None:
        await asyncio.to_thread(self._ensure_initialized)

    async def close(self) -> None:
        with self._init_lock:
            if self.engine is not None:
                self.engine.dispose()
            self.engine = None
            self._session_factory = None
            self.initialized = False

    async def get_all(self) -> list[Employee]:
        return await asyncio.to_thread(self._get_all)

    async def put(self, employee: Employee) -> None:
        await asyncio.to_thread(self._put, employee)

    async def put_all(self, employees: Iterable[Employee]) -> None:
        await asyncio.to_thread(self._put_all, list(employees))

    async def delete(self, employee_id: str) -> None:
        await asyncio.to_thread(self._delete, employee_id)

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False
        try:
            await asyncio.to_thread(self._ping)
            return True
        except (RecordStoreError, SQLAlchemyError):
            logger.exception("Record store connection check failed")
            return False

    def _ensure_initialized(self) -> sessionmaker[Session]:
        with self._init_lock:
            if self.initialized and self._session_factory is not None:
                return self._session_factory

            try:
                url = make_url(self.url)
                connect_args: dict = {}
                if url.get_backend_name() == "sqlite":
                    connect_args["check_same_thread"] = False
                    if url.database and url.database != ":memory:":
                        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

                engine = create_engine(self.url, connect_args=connect_args)
                Base.metadata.create_all(engine)
            except (SQLAlchemyError, OSError) as e:
                logger.error("Failed to open record store at %s: %s", self.url, e)
                raise RecordStoreError(f"Failed to open record store: {e}") from e

            self.engine = engine
            self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
            self.initialized = True
            logger.info("RecordStore initialized (url=%s)", self.url)
            return self._session_factory

    def _ping(self) -> None:
        factory = self._ensure_initialized()
        with factory() as session:
            session.execute(text("SELECT 1"))

    def _get_all(self) -> list[Employee]:
        factory = self._ensure_initialized()
        try:
            with factory() as session:
                rows = session.scalars(select(EmployeeRow).order_by(EmployeeRow.id)).all()
                return [Employee.model_validate(row.payload) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Failed to read records: %s", e)
            raise RecordStoreError(f"Failed to read records: {e}") from e
        except ValidationError as e:
            logger.error("Stored record failed validation: %s", e)
            raise RecordStoreError(f"Stored record is corrupt: {e}") from e

    def _put(self, employee: Employee) -> None:
        factory = self._ensure_initialized()
        try:
            with factory.begin() as session:
                session.merge(EmployeeRow(id=employee.id, payload=employee.to_document()))
        except SQLAlchemyError as e:
            logger.error("Failed to save record %s: %s", employee.id, e)
            raise RecordStoreError(f"Failed to save record {employee.id}: {e}") from e

    def _put_all(self, employees: list[Employee]) -> None:
        factory = self._ensure_initialized()
        try:
            with factory.begin() as session:
                session.execute(delete(EmployeeRow))
                session.add_all(EmployeeRow(id=emp.id, payload=emp.to_document()) for emp in employees)
        except SQLAlchemyError as e:
            logger.error("Failed to replace records (count=%d): %s", len(employees), e)
            raise RecordStoreError(f"Failed to replace records: {e}") from e
        logger.info("Replaced store contents with %d records", len(employees))

    def _delete(self, employee_id: str) -> None:
        factory = self._ensure_initialized()
        try:
            with factory.begin() as session:
                session.execute(delete(EmployeeRow).where(EmployeeRow.id == employee_id))
        except SQLAlchemyError as e:
            logger.error("Failed to delete record %s: %s", employee_id, e)
            raise RecordStoreError(f"Failed to delete record {employee_id}: {e}") from e
