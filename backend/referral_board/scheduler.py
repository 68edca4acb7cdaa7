"""
Cleanup Scheduler - Periodic purge of expired rejected referrals

This module runs ``purge_rejected_referrals`` on an APScheduler interval.

Schedule:
    - First run immediately when the scheduler starts
    - Then every ``cleanup_interval_hours`` (default 1)
    - Missed runs are coalesced into one; there is no catch-up for time the
      process was down

Failure Policy:
    A failed run is logged and swallowed. It is not retried within the same
    cycle and the next interval fires as normal.

Single-instance: there is no distributed lock, so running several app
processes means several schedulers, each purging the same rows.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import AsyncSession

from referral_board.config import Settings, get_settings
from referral_board.database import async_session
from referral_board.services.referrals import purge_rejected_referrals
from referral_board.timeutil import utcnow

logger = logging.getLogger(__name__)

JOB_ID = "cleanup_rejected_referrals"


class CleanupScheduler:
    """Start/stop wrapper around the recurring rejected-referral purge."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = async_session,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.settings = settings or get_settings()
        self.clock = clock
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def run_once(self) -> int:
        """
        Run a single purge.

        Returns:
            Number of referrals deleted, or 0 if the run failed
        """
        logger.info("Running cleanup task: cleaning up rejected referrals...")
        try:
            async with self.session_factory() as db:
                purge = await purge_rejected_referrals(
                    db,
                    now=self.clock(),
                    retention_hours=self.settings.rejected_retention_hours,
                )
        except Exception:
            logger.exception("Error running cleanup task")
            return 0

        return purge.deleted

    def start(self) -> None:
        """Start the scheduler; must be called from inside a running event loop."""
        if self.running:
            return

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.run_once,
            trigger=IntervalTrigger(hours=self.settings.cleanup_interval_hours),
            id=JOB_ID,
            replace_existing=True,
            next_run_time=datetime.now(timezone.utc),
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()
        logger.info(
            f"Scheduler started: purging rejected referrals every {self.settings.cleanup_interval_hours} hours"
        )

    def stop(self) -> None:
        """Stop the scheduler"""
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Scheduler stopped")
