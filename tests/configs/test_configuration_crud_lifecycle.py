from __future__ import annotations

from tests.configs._helpers import create_configuration


def test_configuration_crud_lifecycle(client) -> None:
    created = create_configuration(client=client, name="default", api_key="s3cr3t")
    assert created["name"] == "default"
    assert created["has_api_key"] is True
    # API key is write-only.
    assert "api_key" not in created
    assert "s3cr3t" not in str(created)

    res = client.get("/configurations/default")
    assert res.status_code == 200
    assert res.json()["model_name"] == "gemini-test"

    res = client.put("/configurations/default", json={"model_name": "gemini-pro"})
    assert res.status_code == 200
    assert res.json()["model_name"] == "gemini-pro"
    assert res.json()["api_url"] == created["api_url"]

    res = client.delete("/configurations/default")
    assert res.status_code == 204

    res = client.get("/configurations/default")
    assert res.status_code == 404
    assert res.json()["detail"] == "Configuration 'default' not found"


def test_list_configurations_is_sorted_by_name(client) -> None:
    create_configuration(client=client, name="zeta")
    create_configuration(client=client, name="alpha")

    res = client.get("/configurations")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()["items"]] == ["alpha", "zeta"]


def test_duplicate_name_returns_400(client) -> None:
    create_configuration(client=client, name="default")

    res = client.post(
        "/configurations",
        json={
            "name": "default",
            "api_key": "other",
            "model_name": "m",
            "api_url": "https://provider.test/x",
        },
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Configuration 'default' already exists."


def test_non_http_url_is_rejected(client) -> None:
    res = client.post(
        "/configurations",
        json={"name": "bad", "api_key": "k", "model_name": "m", "api_url": "ftp://provider.test"},
    )
    assert res.status_code == 400


def test_invalid_name_returns_422(client) -> None:
    res = client.post(
        "/configurations",
        json={"name": "has space", "api_key": "k", "model_name": "m", "api_url": "https://x.test"},
    )
    assert res.status_code == 422


def test_update_and_delete_unknown_configuration_return_404(client) -> None:
    assert client.put("/configurations/ghost", json={"model_name": "m"}).status_code == 404
    assert client.delete("/configurations/ghost").status_code == 404
