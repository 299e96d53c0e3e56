# app/routers/verification.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.email_client import EmailClient, get_email_client
from app.database import get_session
from app.repositories.email_verification_repo import EmailVerificationRepository
from app.repositories.user_repo import UserRepository
from app.schemas.verification import (
    SendVerificationRequest,
    SendVerificationResponse,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from app.services.verification_service import VerificationService

router = APIRouter(prefix="/verification", tags=["Email verification"])

repo = EmailVerificationRepository()
user_repo = UserRepository()
service = VerificationService(repo, user_repo)


@router.post("/send", response_model=SendVerificationResponse)
def send_verification_email(
    payload: SendVerificationRequest,
    session: Session = Depends(get_session),
    email_client: EmailClient = Depends(get_email_client),
):
    """
    Issue a new 6-digit code for the address and email it.

    Any earlier code for the same address stops working.
    """
    service.issue_code(session, email_client, payload.email)
    return SendVerificationResponse(success=True)


@router.post("/verify", response_model=VerifyEmailResponse)
def verify_email(
    payload: VerifyEmailRequest,
    session: Session = Depends(get_session),
):
    """
    Redeem a code.

    Safe to retry: an already verified address answers
    `already_verified: true`.
    """
    return service.redeem_code(session, payload.email, payload.code)


@router.get("/status", response_model=bool)
def is_email_verified(
    email: str,
    session: Session = Depends(get_session),
):
    """Whether a user with this email has verified it."""
    return service.is_verified(session, email)
