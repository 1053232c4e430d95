"""HTTP helper utilities for tests."""

from __future__ import annotations


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers, with a bearer token when given."""

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def sign_up(client, **overrides) -> int:
    """Register a user through the API and return its id."""

    payload = {
        "first_name": "Ana",
        "email": "ana@example.com",
        "password": "pw123456",
    }
    payload.update(overrides)
    resp = client.post("/api/v1/users", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["inserted_id"]


def sign_in(client, email: str, password: str) -> str:
    """Exchange credentials for a bearer token through the API."""

    resp = client.post("/api/v1/users/sign-in", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["token"]
