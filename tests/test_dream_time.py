from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.core.constants import SLEEP_QUALITY_RANGE
from app.core.dream_time import (
    FUTURE_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    compose_instant,
    local_time_of,
    normalize_and_validate,
    parse_offset,
    resolve_offset,
)
from app.core.errors import InvalidOffsetError, ValidationError

NOW = datetime(2024, 3, 1, 7, 5, tzinfo=timezone.utc)


def _normalize(**overrides):
    fields = {
        "dream_date": "2024-03-01",
        "dream_time": "07:00",
        "dream_time_timezone": "+00:00",
        "sleep_quality": 4,
        "description": "flying",
        "mood": "Excited",
        "now": NOW,
    }
    fields.update(overrides)
    return normalize_and_validate(**fields)


def test_scenario_instant_in_epoch_ms() -> None:
    result = _normalize()
    assert result.dream_date_time == 1709276400000
    assert result.dream_time_timezone == "+00:00"


def test_empty_time_means_midnight() -> None:
    empty = _normalize(dream_date="2024-01-01", dream_time="")
    midnight = _normalize(dream_date="2024-01-01", dream_time="00:00")
    assert empty.dream_date_time == midnight.dream_date_time


def test_offset_shifts_instant() -> None:
    utc = _normalize(dream_time="06:00", dream_time_timezone="+00:00")
    ist = _normalize(dream_time="06:00", dream_time_timezone="+05:30")
    assert utc.dream_date_time - ist.dream_date_time == (5 * 60 + 30) * 60 * 1000


@pytest.mark.parametrize(
    ("dream_time", "offset"),
    [("07:00", "+00:00"), ("23:45", "-08:00"), ("00:15", "+05:30"), ("12:00", "+14:00")],
)
def test_local_time_round_trip(dream_time: str, offset: str) -> None:
    result = _normalize(
        dream_date="2024-02-28",
        dream_time=dream_time,
        dream_time_timezone=offset,
    )
    assert local_time_of(result.dream_date_time, offset) == dream_time


def test_future_buffer_boundary() -> None:
    # Seconds are always :00, so move "now" instead of the instant.
    instant = datetime(2024, 3, 1, 7, 1, tzinfo=timezone.utc)

    accepted = _normalize(dream_time="07:01", now=instant - timedelta(seconds=59))
    assert accepted.dream_date_time is not None

    with pytest.raises(ValidationError) as exc:
        _normalize(dream_time="07:01", now=instant - timedelta(seconds=61))
    assert exc.value.detail == FUTURE_MESSAGE


def test_future_date_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        _normalize(dream_date="2024-03-02")
    assert exc.value.detail == FUTURE_MESSAGE


def test_sleep_quality_range_is_one_to_five() -> None:
    # Deliberately 1-5 for both create and update, not the legacy 1-10.
    assert SLEEP_QUALITY_RANGE == (1, 5)

    assert _normalize(sleep_quality=1)
    assert _normalize(sleep_quality=5)
    for bad in (0, 6, 10):
        with pytest.raises(ValidationError) as exc:
            _normalize(sleep_quality=bad)
        assert exc.value.detail == "Sleep quality must be between 1 and 5"


@pytest.mark.parametrize("field", ["description", "mood"])
def test_blank_required_text_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        _normalize(**{field: "   "})


@pytest.mark.parametrize("offset", ["", "Z", "+5:30", "0530", "+05:60", "+24:00", "UTC"])
def test_malformed_offset_is_its_own_error(offset: str) -> None:
    with pytest.raises(InvalidOffsetError):
        _normalize(dream_time_timezone=offset)


@pytest.mark.parametrize(
    ("dream_date", "dream_time"),
    [("2024-02-30", "07:00"), ("2024-13-01", "07:00"), ("2024-03-01", "25:00"), ("20240301", "07:00"), ("2024-03-01", "7:00")],
)
def test_impossible_date_or_time_rejected(dream_date: str, dream_time: str) -> None:
    with pytest.raises(ValidationError) as exc:
        compose_instant(dream_date, dream_time, "+00:00")
    assert not isinstance(exc.value, InvalidOffsetError)
    assert exc.value.detail == INVALID_FORMAT_MESSAGE


def test_parse_offset_sign() -> None:
    assert parse_offset("-03:30") == -timedelta(hours=3, minutes=30)
    assert parse_offset("+00:00") == timedelta(0)


def test_resolve_offset_priority() -> None:
    assert resolve_offset("+01:00", "+02:00") == "+01:00"
    assert resolve_offset(None, "+02:00") == "+02:00"
    assert resolve_offset("", "+02:00") == "+02:00"
    assert resolve_offset(None, None) == "+00:00"
