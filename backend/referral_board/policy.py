"""
Authorization Policy - Who may touch which job or referral

Each ``can_*`` predicate is a pure function of the caller and the record's
fields, so it can be checked without a database. Services call
``ensure(...)`` to turn a failed predicate into an ``AuthorizationError``
(403), which is kept distinct from ``NotFoundError`` (404).

Rules:
    Job read:                any authenticated user
    Job update/delete:       caller owns the job
    Job create:              caller is a jobseeker with a complete profile
    Referral create:         caller is an employer
    Referral status change:  caller is the referral's jobSeeker
    Referral delete:         caller is the referral's employer
    Referral read:           caller is the jobSeeker or the employer
    Sent list:               caller is an employer
    Received list / clear:   caller is a jobseeker
"""

import logging

from referral_board.auth import Principal
from referral_board.errors import AuthorizationError
from referral_board.models import Job, Referral

logger = logging.getLogger(__name__)


def can_read_job(principal: Principal, job: Job) -> bool:
    return True


def can_modify_job(principal: Principal, job: Job) -> bool:
    return job.user_id == principal.id


def can_post_job(principal: Principal) -> bool:
    return principal.is_jobseeker and profile_is_complete(principal)


def profile_is_complete(principal: Principal) -> bool:
    return (
        principal.years_of_experience is not None
        and bool(principal.current_company)
        and bool(principal.linkedin_profile)
    )


def can_create_referral(principal: Principal) -> bool:
    return principal.is_employer


def can_set_referral_status(principal: Principal, referral: Referral) -> bool:
    return referral.job_seeker_id == principal.id


def can_delete_referral(principal: Principal, referral: Referral) -> bool:
    return referral.employer_id == principal.id


def can_read_referral(principal: Principal, referral: Referral) -> bool:
    return principal.id in (referral.job_seeker_id, referral.employer_id)


def can_list_sent_referrals(principal: Principal) -> bool:
    return principal.is_employer


def can_list_received_referrals(principal: Principal) -> bool:
    return principal.is_jobseeker


def can_clear_referrals(principal: Principal) -> bool:
    return principal.is_jobseeker


def ensure(allowed: bool, message: str, principal: Principal) -> None:
    """Raise ``AuthorizationError(message)`` unless ``allowed``."""
    if not allowed:
        logger.warning(f"Authorization denied for user {principal.id} ({principal.role}): {message}")
        raise AuthorizationError(message)
