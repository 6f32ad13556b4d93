from __future__ import annotations

import json
from typing import Any

import httpx

from llm_gateway.configs.store import LLMConfiguration
from llm_gateway.gateway.types import CallRequest

MODEL_PLACEHOLDER = "{model}"
API_KEY_PARAM = "key"


def build_request_payload(*, prompt: str) -> dict[str, Any]:
    return {"contents": [{"parts": [{"text": prompt}]}]}


def build_endpoint_url(*, configuration: LLMConfiguration) -> str:
    """Return the configured URL with `{model}` filled in and the API key as `?key=`."""

    raw = configuration.api_url.replace(MODEL_PLACEHOLDER, configuration.model_name)
    url = httpx.URL(raw).copy_merge_params({API_KEY_PARAM: configuration.api_key})
    return str(url)


def redact_url(url: str) -> str:
    parsed = httpx.URL(url)
    if API_KEY_PARAM not in parsed.params:
        return url
    return str(parsed.copy_set_param(API_KEY_PARAM, "***"))


def build_request(*, prompt: str, configuration: LLMConfiguration) -> CallRequest:
    # Encode through json so quotes, backslashes and control characters in the
    # prompt are escaped. Content-Length is the byte length of the UTF-8 body.
    body = json.dumps(
        build_request_payload(prompt=prompt), ensure_ascii=False, separators=(",", ":")
    ).encode("utf-8")
    return CallRequest(
        prompt=prompt,
        url=build_endpoint_url(configuration=configuration),
        body=body,
        headers={
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
        },
    )
