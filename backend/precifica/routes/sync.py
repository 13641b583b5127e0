"""
Sync routes — remote file settings, pull and push.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from precifica.container import get_settings_store, get_sync_service
from precifica.core.exceptions import (
    ConfigError,
    ConflictError,
    ParseError,
    RemoteError,
    StorageError,
)
from precifica.db.settings_store import SettingsStore
from precifica.schemas.sync import PullResult, PushResult, RemoteSettingsUpdate, SyncStatus
from precifica.services.sync_service import SyncService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sync", tags=["sync"])


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, ConfigError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(
            status_code=409,
            detail=f"{exc} - the remote file changed; pull before pushing again",
        )
    if isinstance(exc, (RemoteError, ParseError)):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/status", response_model=SyncStatus)
async def get_sync_status(service: SyncService = Depends(get_sync_service)):
    return service.status()


@router.put("/settings", response_model=SyncStatus)
async def update_sync_settings(
    body: RemoteSettingsUpdate,
    settings_store: SettingsStore = Depends(get_settings_store),
    service: SyncService = Depends(get_sync_service),
):
    try:
        settings_store.update_remote_descriptor(
            owner=body.owner,
            repository=body.repository,
            path=body.path,
            token=body.token,
        )
    except StorageError as exc:
        raise _to_http(exc) from exc
    return service.status()


@router.post("/pull", response_model=PullResult)
async def pull_remote(service: SyncService = Depends(get_sync_service)):
    """Replace the local grid with the remote file."""
    try:
        return await service.pull()
    except (ConfigError, RemoteError, ParseError, StorageError) as exc:
        logger.info("sync pull failed error=%s", exc)
        raise _to_http(exc) from exc


@router.post("/push", response_model=PushResult)
async def push_remote(service: SyncService = Depends(get_sync_service)):
    """Overwrite the remote file with the local grid."""
    try:
        return await service.push()
    except (ConfigError, RemoteError, ParseError, StorageError) as exc:
        logger.info("sync push failed error=%s", exc)
        raise _to_http(exc) from exc
