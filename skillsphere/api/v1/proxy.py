import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from skillsphere.ai.types import CompletionClient, CompletionError
from skillsphere.api.deps import get_completion_client
from skillsphere.core.errors import error_response
from skillsphere.core.rate_limit import rate_limit

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/groq", summary="Raw chat-completions passthrough")
@rate_limit()
def completion_proxy(
    request: Request,
    payload: dict[str, Any] = Body(...),
    client: CompletionClient = Depends(get_completion_client),
):
    if not isinstance(payload.get("messages"), list) or not payload["messages"]:
        return error_response(status.HTTP_400_BAD_REQUEST, "Missing required field: messages")
    try:
        return client.proxy(payload)
    except CompletionError as exc:
        logger.warning("groq_proxy_failed: %s", exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Groq request failed")
