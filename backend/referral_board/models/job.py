"""
Job Model - Postings a job seeker wants a referral for

Each job is owned by exactly one jobseeker (``user_id``). ``job_id`` is the
external posting identifier and is not unique within the system.
"""

from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from referral_board.database import Base
from referral_board.timeutil import utcnow
import uuid


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    company = Column(String(500), nullable=False)
    position = Column(String(500), nullable=False)
    job_id = Column(String(200), nullable=False)
    job_url = Column(String(2000), nullable=False)
    location = Column(String(500), nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship("User", lazy="raise")
