# app/schemas/dream_entry.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel


class DreamEntryCreate(SQLModel):
    """
    Payload for recording a new dream.

    Every field is required here, even though storage keeps the time
    fields optional:
      - dream_time may be "" (treated as 00:00 when computing the instant)
      - dream_time_timezone is the client's UTC offset, "±HH:MM"

    Content rules (non-blank text, sleep quality range, no future
    instants) are enforced by the service so they surface as 400s with a
    readable message.
    """

    model_config = ConfigDict(extra="forbid")

    description: str
    mood: str
    sleep_quality: int
    prior_night_activities: str
    dream_date: str
    dream_time: str
    dream_time_timezone: str


class DreamEntryUpdate(SQLModel):
    """
    Payload for editing an existing dream.

    Omitted time fields fall back to what the entry already stores:
      - dream_time: stored time, else 00:00
      - dream_time_timezone: stored offset, else +00:00
    """

    model_config = ConfigDict(extra="forbid")

    description: str
    mood: str
    sleep_quality: int
    prior_night_activities: str
    dream_date: str
    dream_time: str | None = None
    dream_time_timezone: str | None = None


class DreamEntryRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    user_id: uuid.UUID
    description: str
    mood: str
    sleep_quality: int
    prior_night_activities: str
    dream_date: str
    dream_time: str | None
    dream_time_timezone: str | None
    dream_date_time: int | None
    created_at: datetime


class DreamEntryGroup(SQLModel):
    """All entries sharing one dream_date."""

    dream_date: str
    count: int
    entries: list[DreamEntryRead]


class DreamEntryId(SQLModel):
    """Result of create / update / delete."""

    id: uuid.UUID
