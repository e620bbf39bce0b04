from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from app.core.dependencies import require_admin
from app.models.auth import AdminSession
from app.models.employee import ImportResult
from app.services.backup import InvalidPayloadError, backup_filename
from app.services.directory_service import ImportInProgressError, directory_service
from app.services.record_store import RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/backup", tags=["backup"])

MAX_BACKUP_SIZE = 50 * 1024 * 1024  # 50 MB, avatars may be embedded


@router.get("/export")
async def export_backup(admin: AdminSession = Depends(require_admin)):  # noqa: B008
    return Response(
        content=directory_service.export_all(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_backup(
    file: UploadFile,
    admin: AdminSession = Depends(require_admin),  # noqa: B008
):
    raw = await file.read()

    if not raw:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )

    if len(raw) > MAX_BACKUP_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large: {len(raw)} bytes. Maximum: {MAX_BACKUP_SIZE} bytes",
        )

    try:
        count = await directory_service.import_payload(raw)
    except InvalidPayloadError as err:
        logger.warning("Rejected backup file=%s: %s", file.filename, err)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid backup file: {err}",
        ) from err
    except ImportInProgressError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err
    except RecordStoreError as err:
        logger.exception("Failed to restore backup file=%s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to restore backup",
        ) from err

    return ImportResult(imported=count, message=f"Imported {count} records")
