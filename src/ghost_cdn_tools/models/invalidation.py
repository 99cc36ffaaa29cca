from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResolvedInvalidation(BaseModel):
    """Purge targets derived from one x-cache-invalidate header value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    urls: tuple[str, ...]
    purge_all: bool = Field(alias="purgeAll")
    pattern: str
    timestamp: datetime = Field(default_factory=utc_now)

    @field_serializer("timestamp")
    def serialize_dt(self, dt: datetime, _info):
        return dt.astimezone(timezone.utc).isoformat()
