# send_test_email.py

import sys

from app.core.config import get_settings
from app.core.email_client import EmailClient
from app.services.verification_service import generate_verification_code


def main():
    if len(sys.argv) != 2:
        print("Usage: python send_test_email.py <recipient@example.com>")
        raise SystemExit(2)

    print("Sending test verification email...")

    client = EmailClient(get_settings())
    client.send_verification_email(sys.argv[1], generate_verification_code())

    print("If no errors: email sent! Check your inbox.")

if __name__ == "__main__":
    main()
