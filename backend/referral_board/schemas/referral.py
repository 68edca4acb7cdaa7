from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from referral_board.schemas.base import CamelModel


class ReferralCreate(BaseModel):
    job: Optional[str] = None


class ReferralStatusUpdate(BaseModel):
    status: Optional[str] = None


class ReferralResponse(CamelModel):
    id: str
    job: str
    job_seeker: str
    employer: str
    status: str
    date: datetime

    @classmethod
    def from_referral(cls, referral) -> "ReferralResponse":
        return cls(
            id=referral.id,
            job=referral.job_id,
            job_seeker=referral.job_seeker_id,
            employer=referral.employer_id,
            status=referral.status,
            date=referral.date,
        )


class JobSummary(CamelModel):
    id: str
    company: str
    position: str
    location: Optional[str] = None
    skills: Optional[list[str]] = None
    description: Optional[str] = None
    job_id: Optional[str] = None
    job_url: Optional[str] = None


class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None


class ReferralDetail(CamelModel):
    """A referral with its job and counterpart users expanded."""

    id: str
    job: Optional[JobSummary] = None
    job_seeker: Optional[UserSummary] = None
    employer: Optional[UserSummary] = None
    status: str
    date: datetime


class ClearReferralsResponse(CamelModel):
    msg: str
    deleted_count: int
    user_name: str


class CleanupRejectedResponse(CamelModel):
    msg: str
    deleted_count: int
    cutoff_date: datetime
    found_referrals: int


class OrphanSweepResponse(CamelModel):
    msg: str
    deleted_count: int
