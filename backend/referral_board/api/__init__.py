from fastapi import APIRouter
from referral_board.api import auth, jobs, profile, referrals, users

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(referrals.router, prefix="/referrals", tags=["referrals"])


@api_router.get("/test")
async def test_route():
    return {"msg": "Server is working!"}
