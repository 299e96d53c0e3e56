# app/core/constants.py
"""
Domain constants shared by the dream entry and verification services.
"""

# --- Email verification ---

VERIFICATION_CODE_LENGTH = 6
VERIFICATION_CODE_MIN = 100_000
VERIFICATION_CODE_MAX = 999_999
VERIFICATION_CODE_EXPIRY_MINUTES = 10

# --- Dream entries ---

# Entries may be stamped at most this far past "now" (client/server clock skew)
FUTURE_BUFFER_MS = 60_000

DEFAULT_DREAM_TIME = "00:00"
DEFAULT_TIMEZONE_OFFSET = "+00:00"

# Inclusive bounds, used by both create and update.
# The entry form and the dream mutations use 1-5; a stale shared validator
# allowed 1-10. This is the one range the API accepts.
SLEEP_QUALITY_RANGE: tuple[int, int] = (1, 5)
