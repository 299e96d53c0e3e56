from __future__ import annotations

import os
import uuid
from datetime import datetime, timedelta, timezone

# Settings are read on first import of the app; pin them before that.
os.environ["SUPABASE_JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.email_client import get_email_client
from app.database import get_session
from app.main import app
from app.models.user import User
from app.services import verification_service as verification_module

TEST_SECRET = "test-secret"


class FakeEmailClient:
    """Records verification emails instead of talking SMTP."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    def send_verification_email(self, to_email: str, code: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append((to_email, code))

    def last_code_for(self, email: str) -> str:
        return [code for to, code in self.sent if to == email][-1]


def make_token(
    sub: uuid.UUID,
    email: str | None = None,
    provider: str | None = "email",
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    claims = {
        "sub": str(sub),
        "exp": int((datetime.now(timezone.utc) + expires_in).timestamp()),
        "aud": "authenticated",
    }
    if email is not None:
        claims["email"] = email
    if provider is not None:
        claims["app_metadata"] = {"provider": provider}
    return jwt.encode(claims, TEST_SECRET, algorithm="HS256")


def auth_headers(
    sub: uuid.UUID,
    email: str | None = None,
    provider: str | None = "email",
) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(sub, email, provider)}"}


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture()
def client(engine, email_client):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_email_client] = lambda: email_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session):
    def _make_user(
        email: str | None = "dreamer@mail.com",
        verified: bool = True,
        name: str = "dreamer",
    ) -> User:
        user = User(
            id=uuid.uuid4(),
            email=email,
            name=name,
            email_verification_time=(
                datetime.now(timezone.utc) if verified else None
            ),
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def fixed_codes(monkeypatch):
    """Issue 111111, 222222, 333333 in that order."""
    codes = iter(["111111", "222222", "333333"])
    monkeypatch.setattr(
        verification_module, "generate_verification_code", lambda: next(codes)
    )
