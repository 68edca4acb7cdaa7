"""
Referral Model - An employer's offer to refer a job seeker for a job

Status Flow:
    pending → accepted
    pending → rejected (deleted by the cleanup sweep once older than the
    retention window)

``job_seeker_id`` is a snapshot of the job's owner taken when the referral
is created; it is not re-derived from the job afterwards.

There is no foreign key on ``job_id``: deleting a job leaves its referrals
in place until the orphan sweep removes them.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from referral_board.database import Base
from referral_board.timeutil import utcnow
import uuid

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
STATUSES = (STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED)
TERMINAL_STATUSES = (STATUS_ACCEPTED, STATUS_REJECTED)


class Referral(Base):
    __tablename__ = "referrals"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = Column(String, nullable=False, index=True)
    job_seeker_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    employer_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)
    date = Column(DateTime, nullable=False, default=utcnow, index=True)
