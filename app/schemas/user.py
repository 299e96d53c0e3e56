# app/schemas/user.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: str | None
    name: str
    email_verified: bool
    email_verification_time: datetime | None
    created_at: datetime


class UserUpdate(SQLModel):
    """
    Partial profile update for authenticated users.
    Only editable field is `name` here.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=50)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class LinkableAccountsRead(SQLModel):
    """
    Other accounts sharing the caller's email address.
    """

    current_user_verified: bool
    linkable_accounts: int
    unverified_accounts: int
    can_link: bool


class LinkAccountsResult(SQLModel):
    linked: bool
    message: str
    linked_accounts: int = 0
    transferred_entries: int = 0
