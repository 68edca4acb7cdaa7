"""
Domain Errors - Failure kinds raised by the service layer

Services raise these instead of HTTP exceptions; the app-level handlers in
``referral_board.main`` render each one as ``{"msg": message}`` with the
class's ``status_code``.

Hierarchy:
    ReferralBoardError
    ├── ValidationError (400)
    │   └── InvalidIdentifierError (400)
    ├── AuthenticationError (401)
    ├── AuthorizationError (403)
    ├── NotFoundError (404)
    └── ConflictError (400)
        └── InvalidTransitionError (400)
"""


class ReferralBoardError(Exception):
    """Base class for all expected failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReferralBoardError):
    """Malformed or missing input."""

    status_code = 400


class InvalidIdentifierError(ValidationError):
    def __init__(self, resource: str):
        super().__init__(f"Invalid {resource} ID format")


class AuthenticationError(ReferralBoardError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class AuthorizationError(ReferralBoardError):
    """Valid identity, wrong role or not the owner."""

    status_code = 403


class NotFoundError(ReferralBoardError):
    status_code = 404


class ConflictError(ReferralBoardError):
    # Duplicates are reported as 400, not 409
    status_code = 400


class InvalidTransitionError(ConflictError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Referral is already {current} and cannot be changed to {requested}")
        self.current = current
        self.requested = requested
