from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from referral_board.auth import Principal, get_current_user
from referral_board.config import get_settings
from referral_board.database import get_db
from referral_board.schemas import (
    ReferralCreate,
    ReferralStatusUpdate,
    ReferralResponse,
    ReferralDetail,
    MessageResponse,
    ClearReferralsResponse,
    CleanupRejectedResponse,
    OrphanSweepResponse,
)
from referral_board.services.referrals import ReferralLedger, purge_rejected_referrals

router = APIRouter()

# Fixed paths are declared before /{referral_id} so they are matched first


@router.get("/sent", response_model=list[ReferralDetail])
async def list_sent(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    return await ReferralLedger(db).list_sent(principal)


@router.get("/received", response_model=list[ReferralDetail])
async def list_received(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    return await ReferralLedger(db).list_received(principal)


@router.get("/cleanup-rejected", response_model=CleanupRejectedResponse)
async def cleanup_rejected(db: AsyncSession = Depends(get_db)):
    purge = await purge_rejected_referrals(db)
    return CleanupRejectedResponse(
        msg=f"Auto-deleted {purge.deleted} rejected referrals older than {get_settings().rejected_retention_hours} hours",
        deleted_count=purge.deleted,
        cutoff_date=purge.cutoff,
        found_referrals=purge.found,
    )


@router.delete("/clear-all", response_model=ClearReferralsResponse)
async def clear_all(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    deleted = await ReferralLedger(db).clear_for_job_seeker(principal)
    return ClearReferralsResponse(
        msg=f"Successfully cleared {deleted} referrals",
        deleted_count=deleted,
        user_name=principal.name,
    )


@router.delete("/cleanup", response_model=OrphanSweepResponse)
async def cleanup_orphaned(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    deleted = await ReferralLedger(db).sweep_orphaned()
    return OrphanSweepResponse(
        msg=f"Cleanup completed. Removed {deleted} referrals with deleted jobs.",
        deleted_count=deleted,
    )


@router.get("/{referral_id}", response_model=ReferralDetail)
async def get_referral(
    referral_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    return await ReferralLedger(db).get_detail(principal, referral_id)


@router.post("", response_model=ReferralResponse)
async def create_referral(
    data: ReferralCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    referral = await ReferralLedger(db).create(principal, data.job)
    return ReferralResponse.from_referral(referral)


@router.put("/{referral_id}", response_model=ReferralResponse)
async def set_referral_status(
    referral_id: str,
    data: ReferralStatusUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    referral = await ReferralLedger(db).set_status(principal, referral_id, data.status)
    return ReferralResponse.from_referral(referral)


@router.delete("/{referral_id}", response_model=MessageResponse)
async def delete_referral(
    referral_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    await ReferralLedger(db).delete(principal, referral_id)
    return MessageResponse(msg="Referral removed successfully")
