# app/services/user_service.py
import logging

from sqlmodel import Session

from app.core.auth import is_user_verified
from app.core.errors import AuthenticationError, ValidationError
from app.models.user import User
from app.repositories.dream_entry_repo import DreamEntryRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    LinkAccountsResult,
    LinkableAccountsRead,
    UserRead,
    UserUpdate,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - self profile read / edit
      - account linking: folding other verified accounts that share the
        caller's email into the caller (their dream entries move over)
    """

    def __init__(self, repo: UserRepository, dream_repo: DreamEntryRepository):
        self.repo = repo
        self.dream_repo = dream_repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> UserRead:
        """Return the current authenticated user with verification status."""
        return UserRead(
            id=current_user.id,
            email=current_user.email,
            name=current_user.name,
            email_verified=is_user_verified(current_user),
            email_verification_time=current_user.email_verification_time,
            created_at=current_user.created_at,
        )

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> UserRead:
        """
        Partial update for profile edits.
        Currently, only `name` is editable.
        """
        if payload.name is not None:
            current_user.name = payload.name

        user = self.repo.update(session, current_user)
        return self.get_me(user)

    # ----- Account linking -----

    def check_linkable_accounts(
        self,
        session: Session,
        current_user: User,
    ) -> LinkableAccountsRead | None:
        """
        Count other accounts sharing the caller's email.

        Returns None when the caller has no email address.
        """
        if not current_user.email:
            return None

        others = self.repo.list_others_with_email(
            session, current_user.email, current_user.id
        )
        verified = [u for u in others if u.email_verification_time is not None]
        current_verified = current_user.email_verification_time is not None

        return LinkableAccountsRead(
            current_user_verified=current_verified,
            linkable_accounts=len(verified),
            unverified_accounts=len(others) - len(verified),
            can_link=current_verified and len(verified) > 0,
        )

    def link_accounts_by_email(
        self,
        session: Session,
        current_user: User,
    ) -> LinkAccountsResult:
        """
        Merge other verified accounts with the caller's email into the caller.

        Steps:
          1. Require an email on the caller and that it is verified.
          2. Find other users with the same email and a verification time.
          3. Move their dream entries to the caller, delete those users.
          4. Commit once.

        Raises:
            ValidationError: caller has no email.
            AuthenticationError: caller's email is not verified.
        """
        if not current_user.email:
            raise ValidationError("User has no email address")

        if current_user.email_verification_time is None:
            raise AuthenticationError("Email verification required")

        others = [
            u
            for u in self.repo.list_others_with_email(
                session, current_user.email, current_user.id
            )
            if u.email_verification_time is not None
        ]

        if not others:
            return LinkAccountsResult(
                linked=False,
                message="No other verified accounts found with this email",
            )

        transferred = 0
        for other in others:
            transferred += self.dream_repo.reassign_owner(
                session, other.id, current_user.id
            )
            session.delete(other)

        session.commit()
        logger.info(
            "Linked %d account(s) into user %s (%d entries moved)",
            len(others),
            current_user.id,
            transferred,
        )

        return LinkAccountsResult(
            linked=True,
            message=f"Successfully linked {len(others)} account(s)",
            linked_accounts=len(others),
            transferred_entries=transferred,
        )
