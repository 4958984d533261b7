import asyncio
import logging

from devbytes.application.refresh_coordinator import RefreshCoordinator

log = logging.getLogger("devbytes.refresh_loop")


async def run_periodic_refresh(coordinator: RefreshCoordinator, interval_sec: int) -> None:
    while True:
        await asyncio.sleep(interval_sec)
        if coordinator.closed:
            return
        try:
            await asyncio.shield(coordinator.trigger_refresh())
            log.info("Periodic playlist refresh done items=%d", len(coordinator.items.value))
        except Exception:
            log.exception("Periodic playlist refresh failed")


def start_periodic_refresh(coordinator: RefreshCoordinator, interval_sec: int) -> asyncio.Task:
    return asyncio.get_running_loop().create_task(run_periodic_refresh(coordinator, interval_sec))
