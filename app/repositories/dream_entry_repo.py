# app/repositories/dream_entry_repo.py
import uuid

from sqlmodel import Session, select

from app.models.dream_entry import DreamEntry


class DreamEntryRepository:
    """
    Data access layer for dream_entries.

    Single-row writes commit immediately; the account-linking transfer
    uses `reassign_owner` and commits in the service.
    """

    def get_by_id(self, session: Session, entry_id: uuid.UUID) -> DreamEntry | None:
        return session.get(DreamEntry, entry_id)

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[DreamEntry]:
        """All entries owned by `user_id`, unordered."""
        stmt = select(DreamEntry).where(DreamEntry.user_id == user_id)
        return list(session.exec(stmt).all())

    def create(self, session: Session, entry: DreamEntry) -> DreamEntry:
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def update(self, session: Session, entry: DreamEntry) -> DreamEntry:
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def delete(self, session: Session, entry: DreamEntry) -> None:
        session.delete(entry)
        session.commit()

    def reassign_owner(
        self,
        session: Session,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
    ) -> int:
        """
        Move every entry of `from_user_id` to `to_user_id` without committing.

        Returns:
            Number of entries moved.
        """
        entries = self.list_for_user(session, from_user_id)
        for entry in entries:
            entry.user_id = to_user_id
            session.add(entry)
        session.flush()
        return len(entries)
