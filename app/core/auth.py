# app/core/auth.py
import logging
import uuid
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.clock import utc_now
from app.core.config import get_settings
from app.core.errors import AuthenticationError
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

settings = get_settings()
user_repo = UserRepository()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so list endpoints can answer anonymous callers.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        AuthenticationError: if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise AuthenticationError("Invalid or expired token")


def _default_name_from_email(email: str | None) -> str:
    """
    Derive a default display name from email if the user has not
    completed their profile yet.
    """
    if not email:
        return "Dreamer"
    if "@" in email:
        return email.split("@", 1)[0][:50]
    return email[:50]


def _signed_in_with_oauth(payload: dict[str, Any]) -> bool:
    """True for tokens issued through a social provider (google, ...)."""
    app_metadata = payload.get("app_metadata") or {}
    provider = app_metadata.get("provider")
    return bool(provider) and provider not in ("email", "anonymous")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a Supabase JWT.

    Flow:
      1. If no Authorization header => anonymous => return None.
      2. Decode JWT => extract 'sub' (auth user id) and optional 'email'.
      3. Convert 'sub' to UUID to match User.id type.
      4. Find user profile in public.users.
      5. If missing, auto-provision a profile. OAuth sign-ups arrive with
         an address the provider already confirmed, so they start verified.

    Raises:
        AuthenticationError: if token is malformed or missing 'sub'.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email") or None

    if not sub:
        raise AuthenticationError("Token missing sub")

    # Supabase provides sub as a string; enforce UUID
    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise AuthenticationError("Invalid sub in token")

    user = user_repo.get_by_id(session, sub_uuid)

    if user is None:
        user = User(
            id=sub_uuid,
            email=email,
            name=_default_name_from_email(email),
            email_verification_time=(
                utc_now() if email and _signed_in_with_oauth(payload) else None
            ),
        )
        user = user_repo.create(session, user)
        logger.info("Provisioned profile for user %s", user.id)

    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        AuthenticationError: if user is None.
    """
    if user is None:
        raise AuthenticationError()
    return user


def is_user_verified(user: User | None) -> bool:
    """
    Verification status of a profile.

    No email (anonymous / OAuth without address) counts as verified;
    an email user needs email_verification_time.
    """
    if user is None:
        return False
    return not user.email or user.email_verification_time is not None


def require_verified_user(user: User = Depends(require_auth)) -> User:
    """
    Enforce an authenticated caller whose email (if any) is verified.

    Raises:
        AuthenticationError: "Email verification required"
    """
    if not is_user_verified(user):
        raise AuthenticationError("Email verification required")
    return user


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Like get_current_user, but a bad or expired token reads as anonymous.

    For read endpoints that answer unidentified callers with an empty result.
    """
    try:
        return get_current_user(credentials, session)
    except AuthenticationError as exc:
        logger.debug("Ignoring unusable token: %s", exc.detail)
        return None
