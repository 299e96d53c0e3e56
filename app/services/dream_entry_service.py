# app/services/dream_entry_service.py
import logging
import uuid
from datetime import datetime
from itertools import groupby

from sqlmodel import Session

from app.core.clock import to_epoch_ms
from app.core.dream_time import normalize_and_validate, resolve_offset
from app.core.errors import NotFoundError
from app.models.dream_entry import DreamEntry
from app.models.user import User
from app.repositories.dream_entry_repo import DreamEntryRepository
from app.schemas.dream_entry import (
    DreamEntryCreate,
    DreamEntryGroup,
    DreamEntryRead,
    DreamEntryUpdate,
)

logger = logging.getLogger(__name__)


def _sort_key(entry: DreamEntry) -> int:
    """Dream instant, or creation time for entries stored without one."""
    if entry.dream_date_time is not None:
        return entry.dream_date_time
    return to_epoch_ms(entry.created_at)


class DreamEntryService:
    """
    Business logic for dream entries.

    Responsibilities:
      - derive dream_date_time through the shared normalizer on create
        and on update
      - ownership checks: another user's entry is reported exactly like
        a missing one (404)
      - chronological listing and per-date grouping
    """

    def __init__(self, repo: DreamEntryRepository):
        self.repo = repo

    # -------- Helpers --------

    def _get_owned_entry(
        self,
        session: Session,
        user_id: uuid.UUID,
        entry_id: uuid.UUID,
    ) -> DreamEntry:
        """
        Load an entry the caller owns.

        Raises:
            NotFoundError: missing entry, or owned by someone else.
        """
        entry = self.repo.get_by_id(session, entry_id)
        if not entry or entry.user_id != user_id:
            raise NotFoundError("Dream entry")
        return entry

    # -------- Commands --------

    def create_entry(
        self,
        session: Session,
        user: User,
        payload: DreamEntryCreate,
        now: datetime | None = None,
    ) -> DreamEntry:
        """
        Record a new dream for a verified user.

        The offset is required input here; no default is applied.
        dream_time is stored exactly as sent (possibly ""), while the
        instant is computed with "" meaning 00:00.
        """
        normalized = normalize_and_validate(
            dream_date=payload.dream_date,
            dream_time=payload.dream_time,
            dream_time_timezone=payload.dream_time_timezone,
            sleep_quality=payload.sleep_quality,
            description=payload.description,
            mood=payload.mood,
            now=now,
        )

        entry = DreamEntry(
            user_id=user.id,
            description=payload.description,
            mood=payload.mood,
            sleep_quality=payload.sleep_quality,
            prior_night_activities=payload.prior_night_activities,
            dream_date=payload.dream_date,
            dream_time=payload.dream_time,
            dream_time_timezone=normalized.dream_time_timezone,
            dream_date_time=normalized.dream_date_time,
        )
        entry = self.repo.create(session, entry)
        logger.info("Created dream entry %s for user %s", entry.id, user.id)
        return entry

    def update_entry(
        self,
        session: Session,
        user_id: uuid.UUID,
        entry_id: uuid.UUID,
        payload: DreamEntryUpdate,
        now: datetime | None = None,
    ) -> DreamEntry:
        """
        Edit an entry the caller owns.

        Time resolution when fields are omitted:
          - dream_time: keep the stored time (00:00 if none)
          - offset: new value -> stored value -> "+00:00"

        Everything is validated before the row is touched.
        """
        entry = self._get_owned_entry(session, user_id, entry_id)

        time_to_use = (
            payload.dream_time if payload.dream_time is not None else entry.dream_time
        )
        offset_to_use = resolve_offset(
            payload.dream_time_timezone, entry.dream_time_timezone
        )

        normalized = normalize_and_validate(
            dream_date=payload.dream_date,
            dream_time=time_to_use,
            dream_time_timezone=offset_to_use,
            sleep_quality=payload.sleep_quality,
            description=payload.description,
            mood=payload.mood,
            now=now,
        )

        entry.description = payload.description
        entry.mood = payload.mood
        entry.sleep_quality = payload.sleep_quality
        entry.prior_night_activities = payload.prior_night_activities
        entry.dream_date = payload.dream_date
        entry.dream_time = time_to_use
        entry.dream_time_timezone = normalized.dream_time_timezone
        entry.dream_date_time = normalized.dream_date_time

        entry = self.repo.update(session, entry)
        logger.info("Updated dream entry %s", entry.id)
        return entry

    def delete_entry(
        self,
        session: Session,
        user_id: uuid.UUID,
        entry_id: uuid.UUID,
    ) -> uuid.UUID:
        """Delete an entry the caller owns and return its id."""
        entry = self._get_owned_entry(session, user_id, entry_id)
        self.repo.delete(session, entry)
        logger.info("Deleted dream entry %s", entry_id)
        return entry_id

    # -------- Queries --------

    def get_entry(
        self,
        session: Session,
        user_id: uuid.UUID,
        entry_id: uuid.UUID,
    ) -> DreamEntry:
        return self._get_owned_entry(session, user_id, entry_id)

    def list_entries(self, session: Session, user: User | None) -> list[DreamEntry]:
        """
        Entries owned by `user`, newest dream first.

        Anonymous callers get an empty list rather than an error.
        """
        if user is None:
            return []
        entries = self.repo.list_for_user(session, user.id)
        return sorted(entries, key=_sort_key, reverse=True)

    def list_grouped_by_date(
        self,
        session: Session,
        user: User | None,
    ) -> list[DreamEntryGroup]:
        """
        Entries grouped by dream_date, newest date first.

        Within a group, entries keep the list_entries order.
        """
        entries = self.list_entries(session, user)
        by_date = sorted(entries, key=lambda e: e.dream_date, reverse=True)

        groups: list[DreamEntryGroup] = []
        for dream_date, members in groupby(by_date, key=lambda e: e.dream_date):
            items = [DreamEntryRead.model_validate(e) for e in members]
            groups.append(
                DreamEntryGroup(dream_date=dream_date, count=len(items), entries=items)
            )
        return groups
