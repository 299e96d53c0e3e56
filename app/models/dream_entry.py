# app/models/dream_entry.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column
from sqlmodel import SQLModel, Field


class DreamEntry(SQLModel, table=True):
    """
    One recorded dream, owned by a single user.

    Time fields:
      - dream_date: local calendar date "YYYY-MM-DD"
      - dream_time: local "HH:MM" (24h); optional in storage
      - dream_time_timezone: UTC offset "±HH:MM"; optional in storage
      - dream_date_time: derived instant (epoch ms). When present it equals
        dream_date + (dream_time or 00:00) + (offset or +00:00).

    Older rows may lack the optional fields; they stay readable and
    editable.
    """

    __tablename__ = "dream_entries"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    description: str
    mood: str
    sleep_quality: int
    prior_night_activities: str = ""

    dream_date: str = Field(max_length=10)
    dream_time: str | None = Field(default=None, max_length=5)
    dream_time_timezone: str | None = Field(default=None, max_length=6)

    dream_date_time: int | None = Field(
        default=None,
        sa_column=Column(BigInteger, index=True, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
