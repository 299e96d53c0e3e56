# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.dream_entry_repo import DreamEntryRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    LinkAccountsResult,
    LinkableAccountsRead,
    UserRead,
    UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
dream_repo = DreamEntryRepository()
service = UserService(repo, dream_repo)


# -------- Self profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires valid Supabase JWT.
    """
    return service.get_me(current_user)


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update the authenticated user's profile (partial update).

    Currently, only `name` is editable.
    """
    return service.update_me(session, current_user, payload)


# -------- Account linking --------


@router.get("/me/linkable-accounts", response_model=LinkableAccountsRead | None)
def check_linkable_accounts(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Report other accounts using the caller's email.

    Returns null when the caller has no email.
    """
    return service.check_linkable_accounts(session, current_user)


@router.post("/me/link-accounts", response_model=LinkAccountsResult)
def link_accounts(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Fold other verified accounts with the same email into this one.

    Their dream entries move to the caller and the accounts are removed.
    Auth:
      - Requires valid Supabase JWT and a verified email.
    """
    return service.link_accounts_by_email(session, current_user)
