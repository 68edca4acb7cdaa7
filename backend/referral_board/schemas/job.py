from datetime import datetime
from typing import Optional, Union
from referral_board.schemas.base import CamelModel


class OwnerSummary(CamelModel):
    id: str
    name: str
    email: str
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None


class JobCreate(CamelModel):
    # Presence is checked by the catalog so missing fields get one message
    company: Optional[str] = None
    position: Optional[str] = None
    job_id: Optional[str] = None
    job_url: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[Union[list[str], str]] = None
    description: Optional[str] = None


class JobUpdate(JobCreate):
    """Same fields as JobCreate; absent or null fields are left unchanged."""


class JobResponse(CamelModel):
    id: str
    user: Optional[OwnerSummary] = None
    company: str
    position: str
    job_id: str
    job_url: str
    location: str
    skills: list[str]
    description: str
    date: datetime
