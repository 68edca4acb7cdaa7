"""
Referral Ledger - Referral records and their status state machine

State Machine:
    pending ──► accepted   (terminal)
       └──────► rejected   (terminal; purged once older than the retention window)

Only the referral's jobSeeker may move it out of pending. Re-setting the
current status is a no-op. Moving between the two terminal states is
refused unless ``allow_terminal_status_change`` is enabled.

Uniqueness:
    At most one referral per (job, employer). This is a read-then-insert
    check with no storage-level constraint, so two concurrent creates for
    the same pair can both succeed.

Deletion paths:
    - employer deletes a single referral they sent
    - jobSeeker clears every referral they received
    - ``purge_rejected_referrals`` removes rejected referrals past retention
      (scheduled and on demand)
    - ``sweep_orphaned`` removes referrals whose job no longer exists
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from referral_board import policy
from referral_board.auth import Principal
from referral_board.config import Settings, get_settings
from referral_board.errors import (
    ValidationError,
    NotFoundError,
    ConflictError,
    InvalidTransitionError,
)
from referral_board.middleware.metrics import record_referral_transition, record_referrals_deleted
from referral_board.models import (
    Job,
    User,
    Referral,
    STATUS_PENDING,
    TERMINAL_STATUSES,
    STATUS_REJECTED,
)
from referral_board.schemas import ReferralDetail, JobSummary, UserSummary
from referral_board.timeutil import utcnow
from referral_board.validators import parse_object_id

logger = logging.getLogger(__name__)


@dataclass
class RejectedPurge:
    """Outcome of one rejected-referral purge."""

    cutoff: datetime
    found: int
    deleted: int


def rejected_cutoff(now: datetime, retention_hours: int) -> datetime:
    return now - timedelta(hours=retention_hours)


async def purge_rejected_referrals(
    db: AsyncSession,
    now: Optional[datetime] = None,
    retention_hours: Optional[int] = None,
) -> RejectedPurge:
    """
    Delete every rejected referral dated before ``now - retention_hours``.

    The cutoff is computed from ``now`` on each call, so the scheduled run
    and the on-demand endpoint remove the same set when invoked at the same
    instant.

    Args:
        db: Session to run against (committed on success)
        now: Reference time, defaults to the current UTC time
        retention_hours: Defaults to ``settings.rejected_retention_hours``

    Returns:
        RejectedPurge with the cutoff used and the found/deleted counts
    """
    if now is None:
        now = utcnow()
    if retention_hours is None:
        retention_hours = get_settings().rejected_retention_hours

    cutoff = rejected_cutoff(now, retention_hours)
    criteria = (Referral.status == STATUS_REJECTED, Referral.date < cutoff)

    found_result = await db.execute(select(Referral).where(*criteria))
    found = list(found_result.scalars().all())
    for referral in found:
        logger.debug(f"Expired rejected referral {referral.id} for job {referral.job_id} (dated {referral.date})")

    result = await db.execute(delete(Referral).where(*criteria))
    await db.commit()

    deleted = result.rowcount or 0
    record_referrals_deleted("rejected_expired", deleted)
    logger.info(f"Auto-deleted {deleted} rejected referrals older than {cutoff.isoformat()}")
    return RejectedPurge(cutoff=cutoff, found=len(found), deleted=deleted)


def _job_summary(job: Job, full: bool = False) -> JobSummary:
    if not full:
        return JobSummary(id=job.id, company=job.company, position=job.position)
    return JobSummary.model_validate(job)


def _user_summary(user: User, with_profile: bool) -> UserSummary:
    if with_profile:
        return UserSummary.model_validate(user)
    return UserSummary(id=user.id, name=user.name, email=user.email)


class ReferralLedger:
    def __init__(self, db: AsyncSession, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    async def _load(self, referral_id: str) -> Referral:
        referral_id = parse_object_id(referral_id, "referral")
        result = await self.db.execute(
            select(Referral)
            .where(Referral.id == referral_id)
            .execution_options(populate_existing=True)
        )
        referral = result.scalar_one_or_none()
        if referral is None:
            raise NotFoundError("Referral not found")
        return referral

    async def _jobs_by_id(self, job_ids: set[str]) -> dict[str, Job]:
        if not job_ids:
            return {}
        result = await self.db.execute(select(Job).where(Job.id.in_(job_ids)))
        return {job.id: job for job in result.scalars().all()}

    async def _users_by_id(self, user_ids: set[str]) -> dict[str, User]:
        if not user_ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(user_ids)))
        return {user.id: user for user in result.scalars().all()}

    async def create(self, principal: Principal, job_id: Optional[str]) -> Referral:
        policy.ensure(policy.can_create_referral(principal), "Only employers can create referrals", principal)

        if not job_id:
            raise ValidationError("Job ID is required")
        job_id = parse_object_id(job_id, "job")

        result = await self.db.execute(select(Job).where(Job.id == job_id))
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError("Job not found")

        policy.ensure(job.user_id != principal.id, "You cannot refer yourself", principal)

        existing = await self.db.execute(
            select(Referral.id).where(Referral.job_id == job_id, Referral.employer_id == principal.id)
        )
        if existing.first() is not None:
            raise ConflictError("You have already sent a referral for this job")

        referral = Referral(
            job_id=job_id,
            job_seeker_id=job.user_id,
            employer_id=principal.id,
            status=STATUS_PENDING,
        )
        self.db.add(referral)
        await self.db.commit()

        record_referral_transition(STATUS_PENDING)
        logger.info(f"Referral {referral.id} created by employer {principal.id} for job {job_id}")
        return referral

    async def set_status(self, principal: Principal, referral_id: str, new_status: Optional[str]) -> Referral:
        referral = await self._load(referral_id)
        policy.ensure(policy.can_set_referral_status(principal, referral), "Not authorized", principal)

        if new_status not in TERMINAL_STATUSES:
            raise ValidationError("Invalid status")

        current = referral.status
        if current == new_status:
            return referral
        if current in TERMINAL_STATUSES and not self.settings.allow_terminal_status_change:
            raise InvalidTransitionError(current, new_status)

        # Conditional on the status we just read, so a concurrent change is not overwritten
        result = await self.db.execute(
            update(Referral)
            .where(Referral.id == referral.id, Referral.status == current)
            .values(status=new_status)
        )
        await self.db.commit()

        if result.rowcount == 0:
            latest = await self._load(referral.id)
            raise InvalidTransitionError(latest.status, new_status)

        await self.db.refresh(referral)
        record_referral_transition(new_status)
        logger.info(f"Referral {referral.id} moved {current} -> {new_status} by {principal.id}")
        return referral

    async def delete(self, principal: Principal, referral_id: str) -> None:
        referral = await self._load(referral_id)
        policy.ensure(
            policy.can_delete_referral(principal, referral),
            "Not authorized to delete this referral",
            principal,
        )

        await self.db.execute(delete(Referral).where(Referral.id == referral.id))
        await self.db.commit()

        record_referrals_deleted("employer_delete", 1)
        logger.info(f"Referral {referral.id} deleted by employer {principal.id}")

    async def clear_for_job_seeker(self, principal: Principal) -> int:
        """Delete every referral the caller received, whatever its status."""
        policy.ensure(policy.can_clear_referrals(principal), "Only job seekers can clear their referrals", principal)

        result = await self.db.execute(delete(Referral).where(Referral.job_seeker_id == principal.id))
        await self.db.commit()

        deleted = result.rowcount or 0
        record_referrals_deleted("cleared", deleted)
        logger.info(f"Cleared {deleted} referrals for {principal.name} ({principal.id})")
        return deleted

    async def get_detail(self, principal: Principal, referral_id: str) -> ReferralDetail:
        referral = await self._load(referral_id)
        policy.ensure(
            policy.can_read_referral(principal, referral),
            "Not authorized to view this referral",
            principal,
        )

        jobs = await self._jobs_by_id({referral.job_id})
        users = await self._users_by_id({referral.job_seeker_id, referral.employer_id})
        job = jobs.get(referral.job_id)
        job_seeker = users.get(referral.job_seeker_id)
        employer = users.get(referral.employer_id)

        return ReferralDetail(
            id=referral.id,
            job=_job_summary(job, full=True) if job else None,
            job_seeker=_user_summary(job_seeker, with_profile=False) if job_seeker else None,
            employer=_user_summary(employer, with_profile=True) if employer else None,
            status=referral.status,
            date=referral.date,
        )

    async def list_sent(self, principal: Principal) -> list[ReferralDetail]:
        policy.ensure(
            policy.can_list_sent_referrals(principal),
            "Only employers can view sent referrals",
            principal,
        )
        result = await self.db.execute(
            select(Referral).where(Referral.employer_id == principal.id).order_by(Referral.date.desc())
        )
        referrals = list(result.scalars().all())

        jobs = await self._jobs_by_id({r.job_id for r in referrals})
        seekers = await self._users_by_id({r.job_seeker_id for r in referrals})

        # Entries whose job or job seeker has gone are left out
        return [
            ReferralDetail(
                id=r.id,
                job=_job_summary(jobs[r.job_id]),
                job_seeker=_user_summary(seekers[r.job_seeker_id], with_profile=False),
                employer=None,
                status=r.status,
                date=r.date,
            )
            for r in referrals
            if r.job_id in jobs and r.job_seeker_id in seekers
        ]

    async def list_received(self, principal: Principal) -> list[ReferralDetail]:
        policy.ensure(
            policy.can_list_received_referrals(principal),
            "Only job seekers can view received referrals",
            principal,
        )
        result = await self.db.execute(
            select(Referral).where(Referral.job_seeker_id == principal.id).order_by(Referral.date.desc())
        )
        referrals = list(result.scalars().all())

        jobs = await self._jobs_by_id({r.job_id for r in referrals})
        employers = await self._users_by_id({r.employer_id for r in referrals})

        return [
            ReferralDetail(
                id=r.id,
                job=_job_summary(jobs[r.job_id]),
                job_seeker=None,
                employer=_user_summary(employers[r.employer_id], with_profile=True),
                status=r.status,
                date=r.date,
            )
            for r in referrals
            if r.job_id in jobs and r.employer_id in employers
        ]

    async def sweep_orphaned(self) -> int:
        """
        Remove referrals whose job no longer exists.

        A referral whose job lookup fails is skipped and logged; it will be
        looked at again on the next sweep.

        Returns:
            Number of referrals removed
        """
        result = await self.db.execute(select(Referral.id, Referral.job_id))
        rows = result.all()

        deleted = 0
        for referral_id, job_id in rows:
            try:
                job_result = await self.db.execute(select(Job.id).where(Job.id == job_id))
                job_exists = job_result.first() is not None
            except SQLAlchemyError as e:
                logger.warning(f"Skipping referral {referral_id}: job lookup failed: {e}")
                continue

            if not job_exists:
                removed = await self.db.execute(delete(Referral).where(Referral.id == referral_id))
                deleted += removed.rowcount or 0

        await self.db.commit()

        record_referrals_deleted("orphaned", deleted)
        logger.info(f"Orphan sweep removed {deleted} referrals with deleted jobs")
        return deleted
