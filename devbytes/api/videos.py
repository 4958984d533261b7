import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request

from devbytes.application.refresh_coordinator import RefreshCoordinator
from devbytes.core.exceptions import StorageError

router = APIRouter()
log = logging.getLogger("devbytes.videos")


def get_coordinator(request: Request) -> RefreshCoordinator:
    return request.app.state.coordinator


def _payload(coordinator: RefreshCoordinator) -> dict:
    return {"ok": True, **coordinator.snapshot()}


@router.get("/api/videos")
async def list_videos(request: Request) -> dict:
    return _payload(get_coordinator(request))


@router.post("/api/videos/refresh")
async def refresh_videos(request: Request) -> dict:
    coordinator = get_coordinator(request)
    try:
        await asyncio.shield(coordinator.trigger_refresh())
    except StorageError:
        log.exception("Failed to store refreshed playlist")
        raise HTTPException(status_code=503, detail="Playlist cache unavailable")
    return _payload(coordinator)


@router.post("/api/videos/network-error/ack")
async def acknowledge_network_error(request: Request) -> dict:
    coordinator = get_coordinator(request)
    coordinator.acknowledge_network_error()
    return _payload(coordinator)
