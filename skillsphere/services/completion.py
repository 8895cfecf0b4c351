from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from skillsphere.ai.types import ChatMessage, CompletionClient, CompletionError, CompletionUnavailable
from skillsphere.core.config import settings
from skillsphere.parsing.json_response import parse_json_response
from skillsphere.services.outcome import (
    REASON_INVALID_SCHEMA,
    REASON_UNAVAILABLE,
    REASON_UNPARSEABLE,
    REASON_UPSTREAM_ERROR,
    Outcome,
)

logger = logging.getLogger(__name__)


def build_messages(system_prompt: str, user_prompt: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=system_prompt),
        ChatMessage(role="user", content=user_prompt),
    ]


def run_json_completion(
    client: CompletionClient,
    *,
    endpoint: str,
    system_prompt: str,
    user_prompt: str,
    fallback: Any,
    temperature: float | None = None,
    response_model: type[BaseModel] | None = None,
) -> Outcome:
    """Ask the model for JSON and shape-check what comes back.

    Upstream failures, unparseable text and answers that fail
    ``response_model`` validation all yield ``Outcome.degraded`` carrying
    ``fallback``; whether that is served or turned into an error is up to the
    route.
    """
    temp = settings.default_temperature if temperature is None else temperature
    messages = build_messages(system_prompt, user_prompt)

    try:
        text = client.complete(messages, temp)
    except CompletionUnavailable as exc:
        logger.warning("completion_skipped endpoint=%s: %s", endpoint, exc)
        return Outcome.degraded(fallback, REASON_UNAVAILABLE)
    except CompletionError as exc:
        logger.warning("completion_failed endpoint=%s: %s", endpoint, exc)
        return Outcome.degraded(fallback, REASON_UPSTREAM_ERROR)

    parsed = parse_json_response(text, fallback)
    if parsed is fallback:
        return Outcome.degraded(fallback, REASON_UNPARSEABLE)

    if response_model is None:
        return Outcome.ok(parsed)

    try:
        validated = response_model.model_validate(parsed)
    except ValidationError as exc:
        logger.warning(
            "completion_invalid_schema endpoint=%s errors=%s first=%s",
            endpoint,
            exc.error_count(),
            exc.errors()[0].get("loc") if exc.errors() else None,
        )
        return Outcome.degraded(fallback, REASON_INVALID_SCHEMA)
    return Outcome.ok(validated.model_dump(by_alias=True))
