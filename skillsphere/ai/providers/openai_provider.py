from __future__ import annotations

import logging
import time
from typing import Any, Optional, Sequence

from openai import OpenAI, OpenAIError

from skillsphere.ai.types import ChatMessage, CompletionError, CompletionUnavailable

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Chat-completions over the OpenAI SDK against any compatible endpoint."""

    name = "openai"
    credential_env = "OPENAI_API_KEY"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self.model = model
        self._api_key = (api_key or "").strip()
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise CompletionUnavailable(f"{self.credential_env} is missing")

        client_kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "base_url": self._base_url,
            # One attempt per request; callers fall back instead of retrying.
            "max_retries": 0,
        }
        if self._timeout_s is not None:
            client_kwargs["timeout"] = self._timeout_s
        self._client = OpenAI(**client_kwargs)
        return self._client

    def complete(self, messages: Sequence[ChatMessage], temperature: float) -> str:
        client = self._get_client()
        payload = [{"role": m.role, "content": m.content} for m in messages]
        started = time.perf_counter()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=temperature,
            )
        except OpenAIError as exc:
            logger.warning(
                "completion_failed provider=%s model=%s messages=%s latency_ms=%s: %s",
                self.name,
                self.model,
                len(payload),
                int((time.perf_counter() - started) * 1000),
                exc,
            )
            raise CompletionError(f"Completion request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else ""
        latency_ms = int((time.perf_counter() - started) * 1000)
        if not content:
            logger.warning("completion_empty provider=%s model=%s latency_ms=%s", self.name, self.model, latency_ms)
            raise CompletionError("Completion service returned an empty response.")

        logger.info(
            "completion_ok provider=%s model=%s messages=%s temperature=%s chars=%s latency_ms=%s",
            self.name,
            self.model,
            len(payload),
            temperature,
            len(content),
            latency_ms,
        )
        return content

    def proxy(self, payload: dict[str, Any]) -> dict[str, Any]:
        client = self._get_client()
        body = dict(payload)
        body.setdefault("model", self.model)
        body.pop("stream", None)
        try:
            response = client.chat.completions.create(**body)
        except (OpenAIError, TypeError) as exc:
            logger.warning("completion_proxy_failed provider=%s model=%s: %s", self.name, body.get("model"), exc)
            raise CompletionError(f"Completion request failed: {exc}") from exc
        return response.model_dump()
