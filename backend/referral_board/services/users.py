"""
User Directory - Registration, login and profile updates

Roles are fixed at registration. Profile updates touch only name,
experience, company and LinkedIn URL.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_board.auth import hash_password, verify_password, create_access_token
from referral_board.errors import ValidationError, NotFoundError
from referral_board.models import User, ROLES
from referral_board.schemas import RegisterRequest, ProfileUpdate
from referral_board.validators import (
    validate_email,
    validate_linkedin_url,
    validate_experience,
    MIN_PASSWORD_LENGTH,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Credentials"


def _check_profile_fields(
    years_of_experience: Optional[int],
    linkedin_profile: Optional[str],
) -> None:
    if years_of_experience is not None and not validate_experience(years_of_experience):
        raise ValidationError("Years of experience must be a number between 0 and 50")
    if linkedin_profile is not None and not validate_linkedin_url(linkedin_profile):
        raise ValidationError(
            "Please provide a valid LinkedIn profile URL (e.g., https://linkedin.com/in/yourprofile)"
        )


class UserDirectory:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: str) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def register(self, request: RegisterRequest) -> str:
        """Create an account and return a signed token for it."""
        if not request.username:
            raise ValidationError("Username is required")
        if not (request.name and request.email and request.password and request.role):
            raise ValidationError("Please provide all required fields: name, email, password and role")
        if not validate_email(request.email):
            raise ValidationError("Please provide a valid email address")
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if request.role not in ROLES:
            raise ValidationError("Role must be either 'jobseeker' or 'employer'")
        _check_profile_fields(request.years_of_experience, request.linkedin_profile)

        existing = await self.db.execute(select(User.id).where(User.email == request.email))
        if existing.scalar_one_or_none() is not None:
            raise ValidationError("User already exists")
        existing = await self.db.execute(select(User.id).where(User.username == request.username))
        if existing.scalar_one_or_none() is not None:
            raise ValidationError("Username already taken")

        user = User(
            username=request.username,
            name=request.name,
            email=request.email,
            password=hash_password(request.password),
            role=request.role,
            years_of_experience=request.years_of_experience,
            current_company=request.current_company or None,
            linkedin_profile=request.linkedin_profile or None,
        )
        self.db.add(user)
        await self.db.commit()

        logger.info(f"Registered {user.role} {user.username} ({user.id})")
        return create_access_token(user.id, user.role)

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a signed token."""
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password):
            raise ValidationError(INVALID_CREDENTIALS)

        return create_access_token(user.id, user.role)

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> User:
        user = await self.get(user_id)

        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data and not update_data["name"].strip():
            raise ValidationError("Name cannot be empty")
        _check_profile_fields(
            update_data.get("years_of_experience"),
            update_data.get("linkedin_profile"),
        )

        for field, value in update_data.items():
            setattr(user, field, value)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Updated profile for {user.id}: {sorted(update_data)}")
        return user
