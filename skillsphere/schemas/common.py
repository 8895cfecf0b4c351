from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Form inputs arrive as either strings or numbers depending on the widget.
Scalar = Union[str, int, float]


class CamelModel(BaseModel):
    """Request bodies use the frontend's camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class ModelAnswer(BaseModel):
    """Base for shape-checking model output; unknown keys are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class SuccessResponse(BaseModel):
    success: bool = True


def clamp_score(value: Any, low: int = 0, high: int = 100) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("score must be a number") from exc
    return int(round(min(high, max(low, number))))


def flatten_strings(value: Any, keys: tuple[str, ...] = ("name", "keyword", "skill", "title")) -> list[str]:
    """Coerce a list the model may have returned as objects into plain strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        raise ValueError("expected a list")
    out: list[str] = []
    for item in value:
        if isinstance(item, dict):
            label = next((item[key] for key in keys if item.get(key)), None)
            if label is None:
                continue
            item = label
        text = as_text(item)
        if text:
            out.append(text)
    return out
