from __future__ import annotations

import json

import httpx

from llm_gateway.gateway.request_builder import build_endpoint_url, build_request, redact_url
from tests.gateway._fakes import make_configuration


def test_body_follows_provider_contents_schema() -> None:
    req = build_request(prompt="Hello", configuration=make_configuration())

    assert req.body == b'{"contents":[{"parts":[{"text":"Hello"}]}]}'
    assert req.method == "POST"
    assert req.headers == {"Content-Type": "application/json", "Content-Length": "43"}


def test_content_length_counts_utf8_bytes_not_characters() -> None:
    req = build_request(prompt="café ☕", configuration=make_configuration())

    assert int(req.headers["Content-Length"]) == len(req.body)
    assert len(req.body) > len(req.body.decode("utf-8"))
    assert json.loads(req.body)["contents"][0]["parts"][0]["text"] == "café ☕"


def test_special_characters_are_escaped() -> None:
    prompt = 'quote " backslash \\ tab \t'
    req = build_request(prompt=prompt, configuration=make_configuration())

    assert json.loads(req.body)["contents"][0]["parts"][0]["text"] == prompt


def test_model_placeholder_and_key_parameter() -> None:
    url = build_endpoint_url(
        configuration=make_configuration(
            api_key="abc123",
            model_name="gemini-1.5-flash",
            api_url="https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        )
    )

    parsed = httpx.URL(url)
    assert parsed.path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert parsed.params["key"] == "abc123"


def test_key_is_merged_with_existing_query_parameters() -> None:
    url = build_endpoint_url(
        configuration=make_configuration(api_key="k", api_url="https://provider.test/gen?alt=json")
    )

    parsed = httpx.URL(url)
    assert parsed.params["alt"] == "json"
    assert parsed.params["key"] == "k"


def test_url_without_placeholder_is_used_as_is() -> None:
    url = build_endpoint_url(
        configuration=make_configuration(api_url="https://provider.test/models/fixed:generate")
    )

    assert httpx.URL(url).path == "/models/fixed:generate"


def test_redact_url_hides_api_key() -> None:
    req = build_request(prompt="x", configuration=make_configuration(api_key="top-secret"))

    redacted = redact_url(req.url)
    assert "top-secret" not in redacted
    assert httpx.URL(redacted).params["key"] == "***"
    assert "top-secret" not in repr(req)
