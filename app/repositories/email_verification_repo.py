# app/repositories/email_verification_repo.py
from sqlmodel import Session, select

from app.models.email_verification import EmailVerification


class EmailVerificationRepository:
    """
    Data access layer for email_verifications.

    NOTE:
      - `delete_for_email` does not commit; issuing a code is
        delete-then-insert and `replace_for_email` commits both together.
    """

    def list_for_email(self, session: Session, email: str) -> list[EmailVerification]:
        stmt = select(EmailVerification).where(EmailVerification.email == email)
        return list(session.exec(stmt).all())

    def get_by_email_and_code(
        self,
        session: Session,
        email: str,
        code: str,
    ) -> EmailVerification | None:
        stmt = select(EmailVerification).where(
            EmailVerification.email == email,
            EmailVerification.code == code,
        )
        return session.exec(stmt).first()

    def delete_for_email(self, session: Session, email: str) -> int:
        """Delete every record for `email`; returns how many were removed."""
        existing = self.list_for_email(session, email)
        for record in existing:
            session.delete(record)
        session.flush()
        return len(existing)

    def replace_for_email(
        self,
        session: Session,
        record: EmailVerification,
    ) -> EmailVerification:
        """
        Make `record` the only verification row for its email.
        """
        self.delete_for_email(session, record.email)
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    def update(self, session: Session, record: EmailVerification) -> EmailVerification:
        """Stage changes; the caller commits."""
        session.add(record)
        session.flush()
        return record
