from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class HealthResponse(BaseModel):
    status: str = Field(default="healthy", description="Liveness indicator.")
    timestamp: str = Field(default_factory=utc_timestamp)
