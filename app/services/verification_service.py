# app/services/verification_service.py
import logging
import secrets
import smtplib
from datetime import datetime, timedelta

from sqlmodel import Session

from app.core.clock import as_utc, utc_now
from app.core.constants import (
    VERIFICATION_CODE_EXPIRY_MINUTES,
    VERIFICATION_CODE_MAX,
    VERIFICATION_CODE_MIN,
)
from app.core.email_client import EmailClient
from app.core.errors import EmailDeliveryError, NotFoundError, ValidationError
from app.core.validation import is_valid_email, require_valid_code, require_valid_email
from app.models.email_verification import EmailVerification
from app.repositories.email_verification_repo import EmailVerificationRepository
from app.repositories.user_repo import UserRepository
from app.schemas.verification import VerifyEmailResponse

logger = logging.getLogger(__name__)


def generate_verification_code() -> str:
    """Uniformly random 6-digit code, 100000-999999 (never a leading zero)."""
    span = VERIFICATION_CODE_MAX - VERIFICATION_CODE_MIN + 1
    return str(VERIFICATION_CODE_MIN + secrets.randbelow(span))


class VerificationService:
    """
    Email verification code lifecycle.

    Per address:
      NONE -> PENDING (issued) -> EXPIRED (past expires_at)
                               -> CONSUMED (matched before expiry)
      Issuing again from any state deletes the old row and starts a new
      PENDING code, so at most one code is live per address.

    Rules:
      - codes expire VERIFICATION_CODE_EXPIRY_MINUTES after issue
      - redeeming for an already-verified user is a successful no-op
    """

    def __init__(
        self,
        repo: EmailVerificationRepository,
        user_repo: UserRepository,
    ):
        self.repo = repo
        self.user_repo = user_repo

    def issue_code(
        self,
        session: Session,
        email_client: EmailClient,
        email: str,
        now: datetime | None = None,
    ) -> EmailVerification:
        """
        Store a fresh code for `email` and mail it.

        Steps:
          1. Validate email syntax.
          2. Generate a 6-digit code.
          3. Replace any existing rows for the address with the new one.
          4. Send it through the email client.

        The row is kept if sending fails; a resend issues a new code.

        Raises:
            ValidationError: malformed email.
            EmailDeliveryError: SMTP transport failure or SMTP not configured.
        """
        require_valid_email(email)
        now = now or utc_now()

        record = EmailVerification(
            email=email,
            code=generate_verification_code(),
            expires_at=now + timedelta(minutes=VERIFICATION_CODE_EXPIRY_MINUTES),
            verified=False,
        )
        record = self.repo.replace_for_email(session, record)
        logger.info("Issued verification code for %s", email)

        try:
            email_client.send_verification_email(email, record.code)
        except (smtplib.SMTPException, OSError, RuntimeError) as exc:
            # RuntimeError: SMTP settings missing
            logger.error("Verification email to %s failed: %s", email, exc)
            raise EmailDeliveryError(str(exc) or type(exc).__name__)

        return record

    def redeem_code(
        self,
        session: Session,
        email: str,
        code: str,
        now: datetime | None = None,
    ) -> VerifyEmailResponse:
        """
        Consume a code and mark the address verified.

        Raises:
            ValidationError: malformed email/code, or code expired.
            NotFoundError: no matching code, or no user with that email.
        """
        require_valid_email(email)
        require_valid_code(code)
        now = now or utc_now()

        verification = self.repo.get_by_email_and_code(session, email, code)
        if verification is None:
            raise NotFoundError("Verification code")

        if now > as_utc(verification.expires_at):
            raise ValidationError("Verification code has expired")

        users = self.user_repo.list_by_email(session, email)
        if not users:
            raise NotFoundError("User")

        # An OAuth profile may already be verified while a password
        # profile for the same address is not; the code proves the address
        # for every profile holding it.
        unverified = [u for u in users if u.email_verification_time is None]
        if not unverified:
            return VerifyEmailResponse(success=True, already_verified=True)

        # Code consumed earlier but a profile never got stamped
        already_consumed = verification.verified
        if not already_consumed:
            verification.verified = True
            self.repo.update(session, verification)

        for user in unverified:
            user.email_verification_time = now
            session.add(user)
        session.commit()

        logger.info("Verified email for %d profile(s)", len(unverified))
        return VerifyEmailResponse(success=True, already_verified=already_consumed)

    def is_verified(self, session: Session, email: str) -> bool:
        """
        True iff users exist for this email and all of them are verified.

        Same rule as redeem_code: one unverified profile means a code is
        still needed.
        """
        if not is_valid_email(email):
            return False
        users = self.user_repo.list_by_email(session, email)
        return bool(users) and all(
            u.email_verification_time is not None for u in users
        )
