from __future__ import annotations

import uuid

from tests.conftest import auth_headers

API = "/api/v1"
EMAIL = "shared@mail.com"

ENTRY = {
    "description": "lost teeth",
    "mood": "Uneasy",
    "sleep_quality": 2,
    "prior_night_activities": "coffee at 9pm",
    "dream_date": "2024-02-02",
    "dream_time": "04:10",
    "dream_time_timezone": "+00:00",
}


def test_me_provisions_profile(client) -> None:
    user_id = uuid.uuid4()

    response = client.get(f"{API}/users/me", headers=auth_headers(user_id, "moon@mail.com"))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(user_id)
    assert body["name"] == "moon"
    assert body["email_verified"] is False


def test_update_name(client) -> None:
    headers = auth_headers(uuid.uuid4(), "moon@mail.com")

    response = client.patch(f"{API}/users/me", json={"name": "  Luna  "}, headers=headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Luna"
    assert client.patch(f"{API}/users/me", json={"name": " "}, headers=headers).status_code == 422


def test_link_accounts_moves_entries(client) -> None:
    google = auth_headers(uuid.uuid4(), EMAIL, provider="google")
    github = auth_headers(uuid.uuid4(), EMAIL, provider="github")
    password = auth_headers(uuid.uuid4(), EMAIL, provider="email")

    client.post(f"{API}/dreams", json=ENTRY, headers=google)
    client.post(f"{API}/dreams", json=ENTRY, headers=google)
    client.post(f"{API}/dreams", json=ENTRY, headers=github)
    client.get(f"{API}/users/me", headers=password)

    linkable = client.get(f"{API}/users/me/linkable-accounts", headers=github).json()
    assert linkable == {
        "current_user_verified": True,
        "linkable_accounts": 1,
        "unverified_accounts": 1,
        "can_link": True,
    }

    result = client.post(f"{API}/users/me/link-accounts", headers=github)
    assert result.status_code == 200
    assert result.json() == {
        "linked": True,
        "message": "Successfully linked 1 account(s)",
        "linked_accounts": 1,
        "transferred_entries": 2,
    }

    assert len(client.get(f"{API}/dreams", headers=github).json()) == 3

    again = client.post(f"{API}/users/me/link-accounts", headers=github).json()
    assert again["linked"] is False


def test_link_requires_verified_email(client) -> None:
    headers = auth_headers(uuid.uuid4(), EMAIL, provider="email")

    response = client.post(f"{API}/users/me/link-accounts", headers=headers)

    assert response.status_code == 401


def test_linkable_accounts_without_email_is_null(client) -> None:
    headers = auth_headers(uuid.uuid4(), email=None, provider="anonymous")

    response = client.get(f"{API}/users/me/linkable-accounts", headers=headers)

    assert response.status_code == 200
    assert response.json() is None
