# app/core/errors.py
from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Caller has no identity, or not enough of one (e.g. unverified email)."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """
    Reserved for access-denied cases.

    Ownership failures on dream entries are reported as NotFoundError
    instead, so other users' records are never confirmed to exist.
    """

    def __init__(self, detail: str = "Access denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ValidationError(HTTPException):
    """Malformed or out-of-policy input (future dates, expired codes, ...)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidOffsetError(ValidationError):
    """The UTC offset string is not of the form ±HH:MM."""

    def __init__(self, detail: str = "Timezone offset must be in ±HH:MM format"):
        super().__init__(detail)


class NotFoundError(HTTPException):
    """Missing entity or unmatched verification code."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class EmailDeliveryError(HTTPException):
    """The outbound email transport refused or failed to send."""

    def __init__(self, reason: str):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to send verification email: {reason}",
        )
