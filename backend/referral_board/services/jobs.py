"""
Job Catalog - Postings owned by job seekers

Any authenticated user may read jobs. Only a jobseeker with a complete
profile may post one, and only the owner may update or delete it.

Deleting a job does not touch its referrals; the orphan sweep in
``ReferralLedger.sweep_orphaned`` removes them later.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from referral_board import policy
from referral_board.auth import Principal
from referral_board.errors import ValidationError, NotFoundError
from referral_board.models import Job
from referral_board.schemas import JobCreate, JobUpdate
from referral_board.validators import parse_skills, parse_object_id

logger = logging.getLogger(__name__)

PROFILE_HINT = "before posting a job. Go to Profile → Update your information."
REQUIRED_FIELDS = ("company", "position", "job_id", "job_url", "location", "skills", "description")


class JobCatalog:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, job_id: str) -> Job:
        job_id = parse_object_id(job_id, "job")
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.user))
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError("Job not found")
        return job

    async def list_all(self) -> list[Job]:
        result = await self.db.execute(
            select(Job).options(selectinload(Job.user)).order_by(Job.date.desc())
        )
        return list(result.scalars().all())

    async def list_for_user(self, principal: Principal) -> list[Job]:
        result = await self.db.execute(
            select(Job)
            .options(selectinload(Job.user))
            .where(Job.user_id == principal.id)
            .order_by(Job.date.desc())
        )
        return list(result.scalars().all())

    async def get(self, principal: Principal, job_id: str) -> Job:
        job = await self._load(job_id)
        policy.ensure(policy.can_read_job(principal, job), "Not authorized to view this job", principal)
        return job

    async def create(self, principal: Principal, data: JobCreate) -> Job:
        policy.ensure(principal.is_jobseeker, "Only job seekers can post jobs", principal)

        if principal.years_of_experience is None:
            raise ValidationError(f"Please complete your profile with years of experience {PROFILE_HINT}")
        if not principal.current_company:
            raise ValidationError(f"Please complete your profile with current company {PROFILE_HINT}")
        if not principal.linkedin_profile:
            raise ValidationError(f"Please complete your profile with LinkedIn profile {PROFILE_HINT}")

        if not all(getattr(data, field) for field in REQUIRED_FIELDS):
            raise ValidationError("Please provide all required fields")

        job = Job(
            user_id=principal.id,
            company=data.company,
            position=data.position,
            job_id=data.job_id,
            job_url=data.job_url,
            location=data.location,
            skills=parse_skills(data.skills),
            description=data.description,
        )
        self.db.add(job)
        await self.db.commit()

        logger.info(f"Job created by {principal.name}: {job.position} at {job.company}")
        return await self._load(job.id)

    async def update(self, principal: Principal, job_id: str, update: JobUpdate) -> Job:
        job = await self._load(job_id)
        policy.ensure(policy.can_modify_job(principal, job), "Not authorized", principal)

        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        if "skills" in update_data:
            update_data["skills"] = parse_skills(update_data["skills"])

        # Blank values leave the stored field as it is
        update_data = {
            field: value
            for field, value in update_data.items()
            if not (isinstance(value, str) and not value.strip()) and value != []
        }

        for field, value in update_data.items():
            setattr(job, field, value)

        await self.db.commit()

        logger.info(f"Job {job.id} updated: {sorted(update_data)}")
        return await self._load(job.id)

    async def delete(self, principal: Principal, job_id: str) -> None:
        job = await self._load(job_id)
        policy.ensure(policy.can_modify_job(principal, job), "Not authorized", principal)

        await self.db.delete(job)
        await self.db.commit()
        logger.info(f"Job {job.id} deleted by {principal.id}")
