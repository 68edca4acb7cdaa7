from referral_board.services.users import UserDirectory
from referral_board.services.jobs import JobCatalog
from referral_board.services.referrals import ReferralLedger, RejectedPurge, purge_rejected_referrals

__all__ = [
    "UserDirectory",
    "JobCatalog",
    "ReferralLedger",
    "RejectedPurge",
    "purge_rejected_referrals",
]
