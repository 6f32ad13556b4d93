from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response (process liveness only)."""

    status: str = Field(
        description="Service status indicator. `ok` means the gateway process is up and responding.",
        examples=["ok"],
    )


