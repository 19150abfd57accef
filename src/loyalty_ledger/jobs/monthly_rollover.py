"""Background scheduler for the monthly leaderboard rollover."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI

from ..core.config import get_settings
from ..core.database import session_scope
from ..schemas import RolloverSummary
from ..services.rollover_service import check_and_snapshot_monthly_winners

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")


def run_rollover_once(current_time: datetime | None = None) -> RolloverSummary:
    """Run one rollover check in its own session and commit it."""

    settings = get_settings()
    with session_scope() as session:
        return check_and_snapshot_monthly_winners(
            session,
            now=current_time,
            snapshot_size=settings.snapshot_size,
        )


async def _execute_monthly_rollover() -> None:
    try:
        summary = run_rollover_once(datetime.now(timezone.utc))
        logger.info("monthly rollover completed: %s", summary.model_dump())
    except Exception:  # pragma: no cover - safeguard for background job
        logger.exception("monthly rollover job failed")
        raise


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    settings = get_settings()
    if not settings.scheduler_enabled:
        logger.info("monthly rollover scheduler disabled")
        return

    if _scheduler.get_job("monthly_rollover") is None:
        _scheduler.add_job(
            _execute_monthly_rollover,
            CronTrigger(
                day=settings.rollover_cron_day,
                hour=settings.rollover_cron_hour,
                minute=settings.rollover_cron_minute,
                timezone="UTC",
            ),
            id="monthly_rollover",
            misfire_grace_time=3600,
            coalesce=True,
            max_instances=1,
        )

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.running:
            _scheduler.start()
            logger.info("monthly rollover scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("monthly rollover scheduler stopped")
