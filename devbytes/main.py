import asyncio
import logging
from contextlib import asynccontextmanager

import requests
from fastapi import FastAPI

from devbytes.api.videos import router as videos_router
from devbytes.config import PLAYLIST_REFRESH_INTERVAL_SEC
from devbytes.infrastructure.playlist import get_refresh_coordinator, get_video_store
from devbytes.infrastructure.refresh_loop import start_periodic_refresh

log = logging.getLogger("devbytes.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_video_store()
    await store.load()

    session = requests.Session()
    coordinator = get_refresh_coordinator(store, session)
    app.state.coordinator = coordinator
    coordinator.start()

    periodic = None
    if PLAYLIST_REFRESH_INTERVAL_SEC > 0:
        periodic = start_periodic_refresh(coordinator, PLAYLIST_REFRESH_INTERVAL_SEC)
        log.info("Periodic playlist refresh every %ds", PLAYLIST_REFRESH_INTERVAL_SEC)

    try:
        yield
    finally:
        if periodic is not None:
            periodic.cancel()
            await asyncio.gather(periodic, return_exceptions=True)
        await coordinator.close()
        session.close()
        await store.close()


app = FastAPI(title="DevBytes playlist cache", lifespan=lifespan)

app.include_router(videos_router)

@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "devbytes_cache",
    }
