# app/routers/dreams.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_optional_user, require_auth, require_verified_user
from app.database import get_session
from app.models.user import User
from app.repositories.dream_entry_repo import DreamEntryRepository
from app.schemas.dream_entry import (
    DreamEntryCreate,
    DreamEntryGroup,
    DreamEntryId,
    DreamEntryRead,
    DreamEntryUpdate,
)
from app.services.dream_entry_service import DreamEntryService

router = APIRouter(prefix="/dreams", tags=["Dreams"])

repo = DreamEntryRepository()
service = DreamEntryService(repo)


@router.post("", response_model=DreamEntryId, status_code=201)
def create_dream_entry(
    payload: DreamEntryCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_verified_user),
):
    """
    Record a new dream.

    Auth:
      - Requires valid Supabase JWT.
      - Email users must have verified their address.
    """
    entry = service.create_entry(session, current_user, payload)
    return DreamEntryId(id=entry.id)


@router.get("", response_model=list[DreamEntryRead])
def list_dream_entries(
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
):
    """
    List the caller's dreams, newest first.

    Without a usable token this returns an empty list.
    """
    return service.list_entries(session, current_user)


@router.get("/grouped", response_model=list[DreamEntryGroup])
def list_dream_entries_grouped(
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
):
    """
    The caller's dreams grouped by dream date, newest date first.
    """
    return service.list_grouped_by_date(session, current_user)


@router.get("/{entry_id}", response_model=DreamEntryRead)
def get_dream_entry(
    entry_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get one of the caller's dreams.

    Entries owned by other users answer 404.
    """
    return service.get_entry(session, current_user.id, entry_id)


@router.put("/{entry_id}", response_model=DreamEntryId)
def update_dream_entry(
    entry_id: uuid.UUID,
    payload: DreamEntryUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Edit one of the caller's dreams.

    Omitted dream_time / dream_time_timezone keep the stored values.
    """
    entry = service.update_entry(session, current_user.id, entry_id, payload)
    return DreamEntryId(id=entry.id)


@router.delete("/{entry_id}", response_model=DreamEntryId)
def delete_dream_entry(
    entry_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Delete one of the caller's dreams.
    """
    deleted_id = service.delete_entry(session, current_user.id, entry_id)
    return DreamEntryId(id=deleted_id)
