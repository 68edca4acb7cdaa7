"""
Input Validators - Registration, profile and identifier checks

Validates:
    - Email addresses (single @, a dot in the domain, no whitespace)
    - LinkedIn profile URLs (https, optional www, /in/<slug>)
    - Years of experience, bounded to MIN_EXPERIENCE..MAX_EXPERIENCE
    - Path identifiers, which must parse as UUIDs

The patterns and the password and experience limits mirror the checks of
the registration form in the web client.

Also normalizes job skills, given either as a list or a comma-separated string.
"""

import re
import uuid

from referral_board.errors import InvalidIdentifierError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
LINKEDIN_PATTERN = re.compile(r"^https://(www\.)?linkedin\.com/in/[a-zA-Z0-9-]+/?$")

MIN_PASSWORD_LENGTH = 6
MIN_EXPERIENCE = 0
MAX_EXPERIENCE = 50


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_linkedin_url(url: str) -> bool:
    return bool(LINKEDIN_PATTERN.match(url))


def validate_experience(years: int) -> bool:
    return MIN_EXPERIENCE <= years <= MAX_EXPERIENCE


def parse_skills(skills) -> list[str]:
    """Accept a list or a comma-separated string."""
    if isinstance(skills, str):
        return [skill.strip() for skill in skills.split(",") if skill.strip()]
    return list(skills)


def parse_object_id(value: str, resource: str) -> str:
    """Normalize a path id, raising ``InvalidIdentifierError`` if it is not a UUID."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(resource)
