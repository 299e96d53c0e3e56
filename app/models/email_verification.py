# app/models/email_verification.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


class EmailVerification(SQLModel, table=True):
    """
    A 6-digit code issued to an email address.

    At most one row exists per email: issuing a new code deletes the
    previous rows for that address first. Expired rows are not swept;
    they linger until superseded.
    """

    __tablename__ = "email_verifications"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(index=True)

    code: str = Field(max_length=6)

    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    verified: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
