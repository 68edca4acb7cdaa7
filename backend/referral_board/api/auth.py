from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from referral_board.auth import Principal, get_current_user
from referral_board.database import get_db
from referral_board.schemas import LoginRequest, TokenResponse, UserResponse
from referral_board.services.users import UserDirectory

router = APIRouter()


@router.get("", response_model=UserResponse)
async def current_user(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_user),
):
    user = await UserDirectory(db).get(principal.id)
    return UserResponse.model_validate(user)


@router.post("", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    token = await UserDirectory(db).authenticate(request.email, request.password)
    return TokenResponse(token=token)
