"""
User Model - Accounts for job seekers and employers

Roles:
    jobseeker: posts jobs they want a referral for
    employer: browses postings and sends referrals

Profile fields (experience, company, LinkedIn) may be left empty at
registration, but a job seeker cannot post a job until all three are set.
"""

from sqlalchemy import Column, String, Integer, DateTime
from referral_board.database import Base
from referral_board.timeutil import utcnow
import uuid

ROLE_JOBSEEKER = "jobseeker"
ROLE_EMPLOYER = "employer"
ROLES = (ROLE_JOBSEEKER, ROLE_EMPLOYER)


class User(Base):
    """
    Account entity.

    Attributes:
        id: UUID primary key
        username: Unique handle
        email: Unique login email
        password: bcrypt hash, never returned by the API
        role: "jobseeker" or "employer", fixed at registration
        years_of_experience: 0-50 (nullable until profile completion)
        current_company: Employer name (nullable)
        linkedin_profile: https://linkedin.com/in/<handle> URL (nullable)
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(100), nullable=False, unique=True)
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)
    years_of_experience = Column(Integer, nullable=True)
    current_company = Column(String(500), nullable=True)
    linkedin_profile = Column(String(500), nullable=True)
    date = Column(DateTime, nullable=False, default=utcnow)

    @property
    def profile_complete(self) -> bool:
        return (
            self.years_of_experience is not None
            and bool(self.current_company)
            and bool(self.linkedin_profile)
        )
