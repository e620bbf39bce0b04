"""First-run population of the RecordStore from legacy data or seed records."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.models.employee import Employee
from app.services.backup import InvalidPayloadError, parse_legacy_payload
from app.services.legacy_store import LEGACY_PAYLOAD_KEY, LegacyPayloadStore
from app.services.record_store import RecordStore, RecordStoreError

logger = logging.getLogger(__name__)


class MigrationAdapter:
    def __init__(self, store: RecordStore, legacy: LegacyPayloadStore) -> None:
        self.store = store
        self.legacy = legacy

    async def load_initial(self, seed_defaults: Sequence[Employee]) -> list[Employee]:
        """Return the startup collection, populating the store if it is empty.

        A populated store is authoritative. Otherwise the legacy payload is
        moved into the store, and failing that the seed records are written.
        Legacy records that fail validation are skipped and the legacy payload
        is then kept. Legacy problems never raise; store errors while reading
        or seeding do.
        """
        await self.store.initialize()

        existing = await self.store.get_all()
        if existing:
            logger.info("Loaded %d records from store", len(existing))
            return existing

        migrated = await self._migrate_legacy()
        if migrated is not None:
            return migrated

        logger.info("No legacy data found, seeding %d default records", len(seed_defaults))
        seeds = list(seed_defaults)
        await self.store.put_all(seeds)
        return seeds

    async def _migrate_legacy(self) -> list[Employee] | None:
        try:
            raw = self.legacy.read(LEGACY_PAYLOAD_KEY)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read legacy payload: %s", e)
            return None

        if raw is None:
            return None

        try:
            employees, skipped = parse_legacy_payload(raw)
        except InvalidPayloadError as e:
            logger.warning("Ignoring unreadable legacy payload: %s", e)
            return None

        for reason in skipped:
            logger.warning("Skipping legacy %s", reason)
        if skipped and not employees:
            logger.warning("Legacy payload has no usable records, keeping it in place")
            return None

        logger.info("Migrating %d records from legacy store", len(employees))
        try:
            await self.store.put_all(employees)
        except RecordStoreError:
            logger.exception("Legacy migration failed while writing to store")
            return None

        if skipped:
            # Skipped rows exist only in the legacy file now.
            logger.warning(
                "Legacy payload kept for manual recovery: %d record(s) were not migrated",
                len(skipped),
            )
            return employees

        try:
            self.legacy.remove(LEGACY_PAYLOAD_KEY)
        except OSError as e:
            logger.warning("Migrated legacy payload could not be removed: %s", e)

        return employees
