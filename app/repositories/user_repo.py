# app/repositories/user_repo.py
import uuid

from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def list_by_email(self, session: Session, email: str) -> list[User]:
        """
        All Users with this email, oldest first.

        Several accounts may share an address until they are linked.
        """
        stmt = select(User).where(User.email == email).order_by(User.created_at)
        return list(session.exec(stmt).all())

    def list_others_with_email(
        self,
        session: Session,
        email: str,
        exclude_id: uuid.UUID,
    ) -> list[User]:
        """All users with `email` except `exclude_id`."""
        stmt = select(User).where(User.email == email, User.id != exclude_id)
        return list(session.exec(stmt).all())

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
