from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._-]*$"


class ConfigurationCreate(BaseModel):
    name: str = Field(
        min_length=1,
        max_length=128,
        pattern=_NAME_PATTERN,
        description="Unique configuration name used by callers to select it.",
        examples=["default"],
    )
    api_key: str = Field(
        min_length=1,
        description="Provider API key. Write-only: never returned by the API.",
    )
    model_name: str = Field(
        min_length=1,
        max_length=255,
        description="Provider model identifier.",
        examples=["gemini-1.5-flash"],
    )
    api_url: str = Field(
        min_length=1,
        max_length=2048,
        description=(
            "Provider endpoint URL. A `{model}` placeholder is replaced with `model_name`."
        ),
        examples=[
            "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
        ],
    )


class ConfigurationUpdate(BaseModel):
    api_key: str | None = Field(default=None, min_length=1, description="Omit to keep existing.")
    model_name: str | None = Field(
        default=None, min_length=1, max_length=255, description="Omit to keep existing."
    )
    api_url: str | None = Field(
        default=None, min_length=1, max_length=2048, description="Omit to keep existing."
    )


class ConfigurationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    model_name: str
    api_url: str
    has_api_key: bool
    created_at: datetime
    updated_at: datetime


class ConfigurationListOut(BaseModel):
    items: list[ConfigurationOut]
