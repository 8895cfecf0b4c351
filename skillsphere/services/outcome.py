from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

OutcomeStatus = Literal["ok", "degraded", "error"]

REASON_UPSTREAM_ERROR = "upstream_error"
REASON_UNAVAILABLE = "llm_unavailable"
REASON_UNPARSEABLE = "unparseable_response"
REASON_INVALID_SCHEMA = "invalid_schema"


@dataclass(frozen=True)
class Outcome:
    """Result of a model-backed operation.

    ``degraded`` carries the canned payload that stood in for the model's
    answer together with the reason; ``error`` has no payload at all.
    """

    status: OutcomeStatus
    data: Any = None
    reason: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "Outcome":
        return cls(status="ok", data=data)

    @classmethod
    def degraded(cls, data: Any, reason: str) -> "Outcome":
        return cls(status="degraded", data=data, reason=reason)

    @classmethod
    def error(cls, reason: str) -> "Outcome":
        return cls(status="error", reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"
