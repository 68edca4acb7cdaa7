from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from referral_board.database import get_db
from referral_board.schemas import RegisterRequest, TokenResponse
from referral_board.services.users import UserDirectory

router = APIRouter()


@router.post("", response_model=TokenResponse)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    token = await UserDirectory(db).register(request)
    return TokenResponse(token=token)
