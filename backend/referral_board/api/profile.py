from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from referral_board.auth import Principal, get_current_user
from referral_board.database import get_db
from referral_board.schemas import ProfileUpdate, UserResponse
from referral_board.services.users import UserDirectory

router = APIRouter()


@router.get("", response_model=UserResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    user = await UserDirectory(db).get(principal.id)
    return UserResponse.model_validate(user)


@router.put("", response_model=UserResponse)
async def update_profile(
    update: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    user = await UserDirectory(db).update_profile(principal.id, update)
    return UserResponse.model_validate(user)
