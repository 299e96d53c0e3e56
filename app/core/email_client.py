# app/core/email_client.py
from __future__ import annotations

"""
Email client for the Dream Journal backend.

Responsibilities:
  - Hold SMTP configuration taken from Settings.
  - Provide send_email(...) and send_verification_email(...) for services.
  - Support both TLS (STARTTLS) and SSL connections.

The client is built per request by `get_email_client()` and handed to the
services that need it, so tests can swap in a fake via
`app.dependency_overrides`.

Typical .env configuration (Gmail example with App Password):

    SMTP_HOST=smtp.gmail.com
    SMTP_PORT=465
    SMTP_USERNAME=dreamjournal@gmail.com
    SMTP_PASSWORD=<app password>
    SMTP_FROM_EMAIL=dreamjournal@gmail.com
    SMTP_FROM_NAME=Dream Journal
    SMTP_USE_TLS=false
    SMTP_USE_SSL=true
"""

import smtplib
from email.message import EmailMessage

from app.core.config import Settings, get_settings
from app.core.constants import VERIFICATION_CODE_EXPIRY_MINUTES


class EmailClient:
    """Thin SMTP wrapper; one connection per message."""

    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        # Fallback: if FROM_EMAIL is not set, default to username
        self.from_email = settings.SMTP_FROM_EMAIL or (settings.SMTP_USERNAME or "")
        self.from_name = settings.SMTP_FROM_NAME
        self.use_tls = settings.SMTP_USE_TLS
        self.use_ssl = settings.SMTP_USE_SSL
        self.verification_subject = settings.VERIFICATION_EMAIL_SUBJECT

    def _create_smtp_client(self) -> smtplib.SMTP:
        """
        Create and return an SMTP client configured for TLS or SSL.

        Priority:
          - If use_ssl → smtplib.SMTP_SSL (e.g., Gmail on 465).
          - Else → smtplib.SMTP + optional STARTTLS if use_tls.
        """
        if not self.host:
            raise RuntimeError("SMTP_HOST is not configured. Please set it in .env.")

        if self.use_ssl:
            server: smtplib.SMTP = smtplib.SMTP_SSL(self.host, self.port, timeout=30)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=30)
            if self.use_tls:
                server.starttls()

        return server

    def send_email(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> None:
        """
        Send an email to a single recipient.

        Raises
        ------
        RuntimeError:
            If required SMTP configuration is missing.
        smtplib.SMTPException / OSError:
            If the underlying SMTP connection or send fails.
        """
        if not (self.host and self.username and self.password):
            raise RuntimeError(
                "SMTP is not configured correctly. "
                "Please set SMTP_HOST, SMTP_USERNAME, and SMTP_PASSWORD in .env."
            )

        msg = EmailMessage()
        msg["From"] = (
            f"{self.from_name} <{self.from_email}>" if self.from_email else self.username
        )
        msg["To"] = to_email
        msg["Subject"] = subject

        # Plain-text part first, HTML as the alternative
        msg.set_content(text_body)
        if html_body:
            msg.add_alternative(html_body, subtype="html")

        server = self._create_smtp_client()
        try:
            server.login(self.username, self.password)
            server.send_message(msg)
        finally:
            try:
                server.quit()
            except smtplib.SMTPException:
                # Connection is being torn down anyway.
                pass

    def send_verification_email(self, to_email: str, code: str) -> None:
        """Send the 6-digit verification code to `to_email`."""
        self.send_email(
            to_email=to_email,
            subject=self.verification_subject,
            text_body=render_verification_text(code),
            html_body=render_verification_html(code),
        )


def render_verification_text(code: str) -> str:
    return (
        "Welcome to Dream Journal!\n\n"
        f"Your verification code is: {code}\n\n"
        f"This code will expire in {VERIFICATION_CODE_EXPIRY_MINUTES} minutes.\n"
        "If you didn't request this verification, you can safely ignore this email."
    )


def render_verification_html(code: str) -> str:
    return f"""
      <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h1 style="color: #3b82f6;">Verify Your Email</h1>
        <p>Welcome to Dream Journal! Please verify your email address by entering this code:</p>
        <div style="background: #f3f4f6; padding: 20px; border-radius: 8px; text-align: center; margin: 20px 0;">
          <h2 style="color: #1f2937; font-size: 32px; letter-spacing: 4px; margin: 0;">{code}</h2>
        </div>
        <p>This code will expire in {VERIFICATION_CODE_EXPIRY_MINUTES} minutes.</p>
        <p>If you didn't request this verification, you can safely ignore this email.</p>
      </div>
    """


def get_email_client() -> EmailClient:
    """FastAPI dependency returning an EmailClient built from settings."""
    return EmailClient(get_settings())
