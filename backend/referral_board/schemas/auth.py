from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from referral_board.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    token: str


class UserResponse(CamelModel):
    id: str
    username: str
    name: str
    email: str
    role: str
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None
    date: datetime
