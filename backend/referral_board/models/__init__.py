from referral_board.models.user import User, ROLE_JOBSEEKER, ROLE_EMPLOYER, ROLES
from referral_board.models.job import Job
from referral_board.models.referral import (
    Referral,
    STATUS_PENDING,
    STATUS_ACCEPTED,
    STATUS_REJECTED,
    STATUSES,
    TERMINAL_STATUSES,
)

__all__ = [
    "User",
    "Job",
    "Referral",
    "ROLE_JOBSEEKER",
    "ROLE_EMPLOYER",
    "ROLES",
    "STATUS_PENDING",
    "STATUS_ACCEPTED",
    "STATUS_REJECTED",
    "STATUSES",
    "TERMINAL_STATUSES",
]
