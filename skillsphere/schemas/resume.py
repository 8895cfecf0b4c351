from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .common import CamelModel, ModelAnswer, clamp_score, flatten_strings


class ResumeAnalysisRequest(CamelModel):
    resume_text: str = Field(min_length=1, max_length=50000)
    target_job: str = Field(default="", max_length=200)


class ResumeAnalysis(ModelAnswer):
    ats_score: int
    summary: str = Field(min_length=1)
    missing_keywords: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)

    @field_validator("ats_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)

    @field_validator("missing_keywords", "strengths", "improvements", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class ExtractTextResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    characters: int
    source_type: str


class ResumeGenerateRequest(CamelModel):
    full_name: str = Field(min_length=1, max_length=200)
    target_role: str = Field(min_length=1, max_length=200)
    education: str = Field(min_length=1, max_length=4000)
    skills: list[str] = Field(min_length=1, max_length=60)
    email: str = Field(default="", max_length=200)
    phone: str = Field(default="", max_length=50)
    experience: str = Field(default="", max_length=12000)
    projects: str = Field(default="", max_length=12000)

    @field_validator("skills", mode="before")
    @classmethod
    def _split(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        return flatten_strings(value)


class ResumeHeader(ModelAnswer):
    name: str = ""
    role: str = ""
    contact: str = ""


class ResumeDocument(ModelAnswer):
    header: ResumeHeader = Field(default_factory=ResumeHeader)
    summary: str = Field(min_length=1)
    skills: list[str] = Field(default_factory=list)
    experience: list[dict[str, Any]] = Field(default_factory=list)
    projects: list[dict[str, Any]] = Field(default_factory=list)
    education: dict[str, Any] = Field(default_factory=dict)

    @field_validator("skills", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class ResumeBuilderAnalysis(ModelAnswer):
    overall_score: int
    ats_score: int
    missing_keywords: list[dict[str, Any]] = Field(default_factory=list)
    skill_gaps: list[dict[str, Any]] = Field(default_factory=list)
    suggestions: list[dict[str, Any]] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)

    @field_validator("overall_score", "ats_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)

    @field_validator("strengths", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class GeneratedResume(ModelAnswer):
    resume: ResumeDocument
    analysis: ResumeBuilderAnalysis
