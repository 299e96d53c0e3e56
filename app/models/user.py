# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user profile for the dream journal.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    Email:
      - absent for anonymous sign-ins
      - NOT unique: an OAuth account and a password account may share one
        address until they are linked

    Verification:
      - email_verification_time set => email confirmed
      - no email at all => treated as verified
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str | None = Field(
        default=None,
        index=True,
        description="Email from Supabase auth.users",
    )

    name: str = Field(
        max_length=50,
        description="Display name; first part of email by default",
    )

    email_verification_time: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="When the email address was verified (UTC)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
