from referral_board.schemas.base import MessageResponse
from referral_board.schemas.auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from referral_board.schemas.profile import ProfileUpdate
from referral_board.schemas.job import JobCreate, JobUpdate, JobResponse, OwnerSummary
from referral_board.schemas.referral import (
    ReferralCreate,
    ReferralStatusUpdate,
    ReferralResponse,
    ReferralDetail,
    JobSummary,
    UserSummary,
    ClearReferralsResponse,
    CleanupRejectedResponse,
    OrphanSweepResponse,
)

__all__ = [
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserResponse",
    "ProfileUpdate",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "OwnerSummary",
    "ReferralCreate",
    "ReferralStatusUpdate",
    "ReferralResponse",
    "ReferralDetail",
    "JobSummary",
    "UserSummary",
    "ClearReferralsResponse",
    "CleanupRejectedResponse",
    "OrphanSweepResponse",
]
