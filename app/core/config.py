# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string, or sqlite:// for local dev)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SMTP_* (outbound transport for verification emails)
      - CORS_ORIGINS (frontend origins allowed to call the API)
    """

    PROJECT_NAME: str = "Dream Journal API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./dream_journal.db"

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

    # SMTP transport (Gmail example: host smtp.gmail.com, port 465, SSL)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    # Falls back to SMTP_USERNAME when empty
    SMTP_FROM_EMAIL: str = ""
    SMTP_FROM_NAME: str = "Dream Journal"
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False

    VERIFICATION_EMAIL_SUBJECT: str = "Verify your Dream Journal account"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
