from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class PurgeOutcome(Enum):
    SUCCESS = "success"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    SKIPPED = "skipped"


class PurgeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    outcome: PurgeOutcome
    status_code: int | None = None
    body: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is PurgeOutcome.SUCCESS
