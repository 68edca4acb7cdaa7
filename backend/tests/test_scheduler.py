"""
Tests for the rejected-referral cleanup scheduler.

Tests cover:
- A run deletes expired rejected referrals and reports the count
- Runs are idempotent
- Failures are logged and swallowed
- start/stop lifecycle and the interval job registration
"""
import logging
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy import select

from conftest import make_job, make_user
from referral_board.config import Settings
from referral_board.models import Referral
from referral_board.scheduler import JOB_ID, CleanupScheduler
from referral_board.services.referrals import ReferralLedger
from referral_board.timeutil import utcnow


@pytest.fixture
def settings():
    return Settings(cleanup_interval_hours=1, rejected_retention_hours=24)


async def seed_rejected(session_factory, age_hours: int) -> str:
    async with session_factory() as db:
        alice = await make_user(db, f"alice{age_hours}", "jobseeker")
        bob = await make_user(db, f"bob{age_hours}", "employer")
        job = await make_job(db, alice)
        ledger = ReferralLedger(db)
        referral = await ledger.create(bob, job.id)
        await ledger.set_status(alice, referral.id, "rejected")
        referral.date = utcnow() - timedelta(hours=age_hours)
        await db.commit()
        return referral.id


async def remaining_ids(session_factory) -> list[str]:
    async with session_factory() as db:
        result = await db.execute(select(Referral.id))
        return list(result.scalars().all())


class TestRunOnce:
    @pytest.mark.asyncio
    async def test_deletes_expired_rejected_only(self, session_factory, settings):
        old = await seed_rejected(session_factory, age_hours=25)
        fresh = await seed_rejected(session_factory, age_hours=2)
        scheduler = CleanupScheduler(session_factory=session_factory, settings=settings)

        deleted = await scheduler.run_once()

        assert deleted == 1
        assert await remaining_ids(session_factory) == [fresh]
        assert old not in await remaining_ids(session_factory)

    @pytest.mark.asyncio
    async def test_second_run_deletes_nothing(self, session_factory, settings):
        await seed_rejected(session_factory, age_hours=30)
        scheduler = CleanupScheduler(session_factory=session_factory, settings=settings)

        assert await scheduler.run_once() == 1
        assert await scheduler.run_once() == 0

    @pytest.mark.asyncio
    async def test_cutoff_is_recomputed_from_clock_each_run(self, session_factory, settings):
        await seed_rejected(session_factory, age_hours=2)
        now = utcnow()
        clock = MagicMock(side_effect=[now, now + timedelta(hours=23)])
        scheduler = CleanupScheduler(session_factory=session_factory, settings=settings, clock=clock)

        assert await scheduler.run_once() == 0
        assert await scheduler.run_once() == 1

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_swallowed(self, settings, caplog):
        broken_factory = MagicMock(side_effect=RuntimeError("database unavailable"))
        scheduler = CleanupScheduler(session_factory=broken_factory, settings=settings)

        with caplog.at_level(logging.ERROR, logger="referral_board.scheduler"):
            deleted = await scheduler.run_once()

        assert deleted == 0
        assert "Error running cleanup task" in caplog.text


class TestLifecycle:
    @patch("referral_board.scheduler.AsyncIOScheduler")
    def test_start_registers_interval_job_running_immediately(self, mock_scheduler_cls, settings):
        mock_scheduler = mock_scheduler_cls.return_value
        mock_scheduler.running = False
        scheduler = CleanupScheduler(session_factory=MagicMock(), settings=settings)

        scheduler.start()

        mock_scheduler.add_job.assert_called_once()
        args, kwargs = mock_scheduler.add_job.call_args
        assert args[0] == scheduler.run_once
        assert isinstance(kwargs["trigger"], IntervalTrigger)
        assert kwargs["trigger"].interval == timedelta(hours=1)
        assert kwargs["id"] == JOB_ID
        assert kwargs["next_run_time"] is not None
        assert kwargs["coalesce"] is True
        mock_scheduler.start.assert_called_once()

    @patch("referral_board.scheduler.AsyncIOScheduler")
    def test_stop_shuts_down_running_scheduler(self, mock_scheduler_cls, settings):
        mock_scheduler = mock_scheduler_cls.return_value
        mock_scheduler.running = False
        scheduler = CleanupScheduler(session_factory=MagicMock(), settings=settings)
        scheduler.start()
        mock_scheduler.running = True

        scheduler.stop()

        mock_scheduler.shutdown.assert_called_once_with(wait=False)
        assert scheduler.running is False

    def test_stop_before_start_is_a_no_op(self, settings):
        scheduler = CleanupScheduler(session_factory=MagicMock(), settings=settings)

        scheduler.stop()

        assert scheduler.running is False
