from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_board.config import get_settings
from referral_board.database import get_db
from referral_board.errors import AuthenticationError
from referral_board.models import User, ROLE_JOBSEEKER, ROLE_EMPLOYER

TOKEN_HEADER = "x-auth-token"
BCRYPT_ROUNDS = 10

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every service call."""

    id: str
    role: str
    name: str
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            role=user.role,
            name=user.name,
            years_of_experience=user.years_of_experience,
            current_company=user.current_company,
            linkedin_profile=user.linkedin_profile,
        )

    @property
    def is_jobseeker(self) -> bool:
        return self.role == ROLE_JOBSEEKER

    @property
    def is_employer(self) -> bool:
        return self.role == ROLE_EMPLOYER


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    hashed = bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: str, role: str) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.token_expire_days)
    to_encode = {"sub": user_id, "role": role, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except JWTError:
        raise AuthenticationError("Token is not valid")
    if not payload.get("sub"):
        raise AuthenticationError("Token is not valid")
    return payload


async def get_current_user(
    x_auth_token: Optional[str] = Header(None, alias=TOKEN_HEADER),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    token = x_auth_token or (credentials.credentials if credentials else None)
    if not token:
        raise AuthenticationError("No token, authorization denied")

    payload = decode_access_token(token)

    result = await db.execute(select(User).where(User.id == payload["sub"]))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError("Token is not valid")

    return Principal.from_user(user)
