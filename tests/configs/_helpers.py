"""Test helpers for the configurations slice."""

from __future__ import annotations

from starlette.testclient import TestClient

GEMINI_URL = "https://provider.test/v1beta/models/{model}:generateContent"


def create_configuration(
    *,
    client: TestClient,
    name: str,
    api_key: str = "test-key",
    model_name: str = "gemini-test",
    api_url: str = GEMINI_URL,
) -> dict:
    """Create a configuration through the API and return the response payload."""
    res = client.post(
        "/configurations",
        json={"name": name, "api_key": api_key, "model_name": model_name, "api_url": api_url},
        follow_redirects=False,
    )
    assert res.status_code == 201, res.text
    return res.json()
