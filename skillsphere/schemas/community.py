from __future__ import annotations

from typing import Literal, Union

from pydantic import Field, field_validator

from .common import CamelModel, ModelAnswer

Technologies = Union[str, list[str]]


class ProjectCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=4000)
    technologies: Technologies = ""
    github_url: str = Field(default="", max_length=500)
    live_url: str = Field(default="", max_length=500)
    image_url: str = Field(default="", max_length=500)


class ProjectUpdateRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=4000)
    technologies: Technologies | None = None
    github_url: str | None = Field(default=None, max_length=500)
    live_url: str | None = Field(default=None, max_length=500)
    image_url: str | None = Field(default=None, max_length=500)


class PortfolioSiteRequest(CamelModel):
    name: str = Field(default="", max_length=200)
    headline: str = Field(default="", max_length=300)
    theme: Literal["light", "dark"] = "light"


class PortfolioSite(ModelAnswer):
    html: str = Field(min_length=1)
    theme: str = "light"

    @field_validator("html")
    @classmethod
    def _looks_like_html(cls, value: str) -> str:
        if "<" not in value or ">" not in value:
            raise ValueError("html must contain markup")
        return value


class CircleCreateRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    creator_id: str = Field(min_length=1, max_length=200)
    creator_name: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=4000)
    type: str = Field(default="mock_interview", max_length=50)
    max_participants: int = Field(default=4, ge=1, le=100)
    scheduled_time: str = Field(default="", max_length=100)


class CircleJoinRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=200)
    user_name: str = Field(default="", max_length=200)
