# app/core/dream_time.py
"""
Date/time normalization for dream entries.

A dream entry is submitted as three loosely-typed strings:

    dream_date            "YYYY-MM-DD"
    dream_time            "HH:MM" (24h), may be empty
    dream_time_timezone   "±HH:MM" UTC offset of the client

They are composed into one ISO-8601 string of the exact form

    "<dream_date>T<dream_time>:00<offset>"

and parsed into a single absolute instant, stored as epoch milliseconds in
`dream_date_time`. The same routine runs on create and update so both
paths derive identical instants from identical input.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.core.clock import from_epoch_ms, to_epoch_ms, utc_now
from app.core.constants import (
    DEFAULT_DREAM_TIME,
    DEFAULT_TIMEZONE_OFFSET,
    FUTURE_BUFFER_MS,
    SLEEP_QUALITY_RANGE,
)
from app.core.errors import InvalidOffsetError, ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})$")

INVALID_FORMAT_MESSAGE = "Invalid date, time, or timezone format"
FUTURE_MESSAGE = "Dream date and time cannot be in the future"


@dataclass(frozen=True)
class NormalizedDreamTime:
    """Derived fields to persist on a dream entry."""

    dream_date_time: int
    dream_time_timezone: str


def parse_offset(value: str | None) -> timedelta:
    """
    Parse a "±HH:MM" UTC offset.

    Checked before composition so a bad offset is reported as such, not
    as a generic date/time parse failure.

    Raises:
        InvalidOffsetError: on anything but ±HH:MM with HH <= 23, MM <= 59.
    """
    match = _OFFSET_RE.match(value or "")
    if match is None:
        raise InvalidOffsetError()

    sign, hours, minutes = match.groups()
    if int(hours) > 23 or int(minutes) > 59:
        raise InvalidOffsetError()

    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return -delta if sign == "-" else delta


def resolve_offset(new_value: str | None, stored_value: str | None) -> str:
    """
    Offset to use on the update path.

    Priority:
      1. explicitly supplied new value
      2. value stored on the existing entry
      3. "+00:00"
    """
    return new_value or stored_value or DEFAULT_TIMEZONE_OFFSET


def compose_instant(dream_date: str, dream_time: str | None, offset: str) -> datetime:
    """
    Combine date, time and offset into an aware datetime.

    An empty or missing time means midnight. Seconds are always ":00".

    Raises:
        InvalidOffsetError: offset is not ±HH:MM.
        ValidationError: date/time are malformed or name an impossible
            calendar instant (e.g. 2024-02-30, 25:00).
    """
    parse_offset(offset)
    time_to_use = dream_time or DEFAULT_DREAM_TIME

    if not _DATE_RE.match(dream_date or "") or not _TIME_RE.match(time_to_use):
        raise ValidationError(INVALID_FORMAT_MESSAGE)

    iso_string = f"{dream_date}T{time_to_use}:00{offset}"
    try:
        return datetime.fromisoformat(iso_string)
    except ValueError:
        raise ValidationError(INVALID_FORMAT_MESSAGE)


def normalize_and_validate(
    *,
    dream_date: str,
    dream_time: str | None,
    dream_time_timezone: str,
    sleep_quality: int,
    description: str,
    mood: str,
    now: datetime | None = None,
) -> NormalizedDreamTime:
    """
    Validate a dream entry payload and derive its absolute instant.

    Steps:
      1. Default an empty time to 00:00.
      2. Compose "<date>T<time>:00<offset>" and parse it.
      3. Reject instants later than now + 60s.
      4. Enforce SLEEP_QUALITY_RANGE (inclusive).
      5. Require non-blank description and mood.

    The caller resolves the offset first; on create it is required input,
    on update it is `resolve_offset(new, stored)`.

    Returns:
        NormalizedDreamTime with the instant in epoch milliseconds and the
        offset string to persist.
    """
    instant = compose_instant(dream_date, dream_time, dream_time_timezone)
    dream_date_time = to_epoch_ms(instant)

    current_ms = to_epoch_ms(now or utc_now())
    if dream_date_time > current_ms + FUTURE_BUFFER_MS:
        raise ValidationError(FUTURE_MESSAGE)

    low, high = SLEEP_QUALITY_RANGE
    if sleep_quality < low or sleep_quality > high:
        raise ValidationError(f"Sleep quality must be between {low} and {high}")

    if not description.strip():
        raise ValidationError("Dream description is required")

    if not mood.strip():
        raise ValidationError("Mood is required")

    return NormalizedDreamTime(
        dream_date_time=dream_date_time,
        dream_time_timezone=dream_time_timezone,
    )


def local_time_of(dream_date_time: int, offset: str) -> str:
    """Wall-clock "HH:MM" at `offset` for a stored instant."""
    tz = timezone(parse_offset(offset))
    return from_epoch_ms(dream_date_time).astimezone(tz).strftime("%H:%M")
