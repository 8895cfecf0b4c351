from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from skillsphere.core.config import FALLBACK_DEGRADE, settings
from skillsphere.core.errors import error_response
from skillsphere.services.outcome import Outcome

logger = logging.getLogger(__name__)

SOURCE_HEADER = "X-Response-Source"
REASON_HEADER = "X-Degraded-Reason"


def outcome_response(
    outcome: Outcome,
    *,
    endpoint: str,
    error_message: str,
    wrap: str | None = None,
) -> JSONResponse:
    """Serve an ``Outcome`` according to the endpoint's fallback policy.

    Degraded answers keep the body shape of a real answer; the headers say
    where the payload came from.
    """
    if outcome.status == "ok":
        return JSONResponse(content=_body(outcome.data, wrap), headers={SOURCE_HEADER: "model"})

    if outcome.status == "degraded" and settings.fallback_policy(endpoint) == FALLBACK_DEGRADE:
        logger.info("serving_fallback endpoint=%s reason=%s", endpoint, outcome.reason)
        return JSONResponse(
            content=_body(outcome.data, wrap),
            headers={SOURCE_HEADER: "fallback", REASON_HEADER: outcome.reason or "unknown"},
        )

    logger.warning("endpoint_failed endpoint=%s status=%s reason=%s", endpoint, outcome.status, outcome.reason)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error_message)


def _body(data: Any, wrap: str | None) -> Any:
    return {wrap: data} if wrap else data
