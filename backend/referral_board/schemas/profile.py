from typing import Optional
from referral_board.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    """Partial update; role, email, username and password are not editable here."""

    name: Optional[str] = None
    years_of_experience: Optional[int] = None
    current_company: Optional[str] = None
    linkedin_profile: Optional[str] = None
