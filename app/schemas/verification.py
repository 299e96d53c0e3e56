# app/schemas/verification.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class SendVerificationRequest(SQLModel):
    """
    Ask for a fresh code to be emailed.

    The address is syntax-checked by the service (400 on failure) rather
    than by EmailStr here, so the error shape matches the rest of the flow.
    """

    model_config = ConfigDict(extra="forbid")

    email: str


class VerifyEmailRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    code: str


class SendVerificationResponse(SQLModel):
    success: bool = True


class VerifyEmailResponse(SQLModel):
    success: bool = True
    already_verified: bool
