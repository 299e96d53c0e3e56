# app/core/validation.py
import re

from email_validator import EmailNotValidError, validate_email

from app.core.constants import VERIFICATION_CODE_LENGTH
from app.core.errors import ValidationError

_CODE_RE = re.compile(rf"^\d{{{VERIFICATION_CODE_LENGTH}}}$")


def is_valid_email(email: str) -> bool:
    """Syntax-only check; no DNS / deliverability lookup."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def require_valid_email(email: str) -> str:
    """
    Return the email unchanged if syntactically valid.

    Raises:
        ValidationError: "Invalid email format"
    """
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email


def require_valid_code(code: str) -> str:
    """
    Return the code unchanged if it is exactly six digits.

    Raises:
        ValidationError: "Invalid verification code format"
    """
    if not _CODE_RE.match(code):
        raise ValidationError("Invalid verification code format")
    return code
