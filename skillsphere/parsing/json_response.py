"""Decoding of model output that is supposed to be JSON.

Chat models asked for "valid JSON only" still wrap the answer in markdown
fences now and then, add a sentence of commentary, or cut it off mid-object.
Callers hand in a fallback of the shape they expect and always get a value of
that shape back.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OPENING_FENCE_RE = re.compile(r"^```(?:[ \t]*[\w+-]*[ \t]*\r?\n)?")
_CLOSING_FENCE_RE = re.compile(r"\r?\n?[ \t]*```$")
_EMBEDDED_FENCE_RE = re.compile(r"```[ \t]*(?:json)?[ \t]*\r?\n?([\s\S]*?)\s*```", re.IGNORECASE)
_PREVIEW_CHARS = 120
_MAX_INT_DIGITS = 4300


class ModelResponseError(ValueError):
    """Model output could not be decoded as JSON."""


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")


def _bounded_int(token: str) -> int:
    if len(token.lstrip("-")) > _MAX_INT_DIGITS:
        raise ValueError(f"integer too long: {len(token)} digits")
    return int(token)


def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"number out of range: {token[:20]}")
    return value


def strip_code_fences(text: str) -> str:
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _outer_span(text: str) -> str | None:
    starts = [idx for idx in (text.find("{"), text.find("[")) if idx != -1]
    if not starts:
        return None
    start = min(starts)
    closer = "}" if text[start] == "{" else "]"
    end = text.rfind(closer)
    if end <= start:
        return None
    return text[start : end + 1]


def _candidates(cleaned: str) -> list[str]:
    # Direct decode first; commentary around a fenced block or a bare object
    # is only looked at when that fails.
    found = [cleaned]
    match = _EMBEDDED_FENCE_RE.search(cleaned)
    if match and match.group(1).strip():
        found.append(match.group(1).strip())
    span = _outer_span(cleaned)
    if span:
        found.append(span)
    return found


def decode_json_response(text: Any) -> Any:
    if not isinstance(text, str):
        raise ModelResponseError(f"expected text, got {type(text).__name__}")
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ModelResponseError("empty response")

    last_error: Exception | None = None
    for candidate in _candidates(cleaned):
        try:
            return json.loads(
                candidate,
                parse_constant=_reject_constant,
                parse_float=_finite_float,
                parse_int=_bounded_int,
            )
        except (ValueError, RecursionError) as exc:
            last_error = exc
    raise ModelResponseError(str(last_error)) from last_error


def _preview(text: Any) -> str:
    if not isinstance(text, str):
        return repr(text)[:_PREVIEW_CHARS]
    flat = " ".join(text.split())
    return flat[:_PREVIEW_CHARS]


def parse_json_response(text: Any, fallback: T) -> T:
    """Return the decoded JSON, or ``fallback`` itself when it cannot be used.

    The decoded value must be an instance of ``type(fallback)``; an array where
    an object was expected counts as a failure. This function never raises.
    """
    try:
        decoded = decode_json_response(text)
    except ModelResponseError as exc:
        logger.warning("model_json_parse_failed error=%s preview=%r", exc, _preview(text))
        return fallback

    if fallback is not None and not isinstance(decoded, type(fallback)):
        logger.warning(
            "model_json_shape_mismatch expected=%s got=%s",
            type(fallback).__name__,
            type(decoded).__name__,
        )
        return fallback
    return decoded
