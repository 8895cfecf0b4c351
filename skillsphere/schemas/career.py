from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from .common import CamelModel, ModelAnswer, Scalar, clamp_score, flatten_strings


class CareerRecommendRequest(CamelModel):
    skills: str = Field(min_length=1, max_length=4000)
    education: str = Field(default="", max_length=4000)
    interests: str = Field(default="", max_length=4000)
    experience: Scalar | None = None


class CareerOption(ModelAnswer):
    title: str = Field(min_length=1)
    description: str = ""
    match_score: int = 0

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


class CareerRecommendation(ModelAnswer):
    careers: list[CareerOption] = Field(min_length=1)
    trending_industries: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)

    @field_validator("trending_industries", "next_steps", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class PersonaRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=200)
    name: str = Field(min_length=1, max_length=200)
    current_role: str = Field(min_length=1, max_length=200)
    experience: Scalar | None = None
    skills: str = Field(default="", max_length=4000)
    achievements: str = Field(default="", max_length=8000)
    goals: str = Field(default="", max_length=4000)


class Persona(ModelAnswer):
    name: str = ""
    title: str = ""
    summary: str = Field(min_length=1)
    competencies: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    trajectory: str = ""

    @field_validator("competencies", "highlights", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class JobTrendSearchRequest(CamelModel):
    role: str = Field(min_length=1, max_length=200)
    location: str | None = Field(default=None, max_length=200)


class SkillDemand(ModelAnswer):
    name: str
    percentage: int = 0

    @field_validator("percentage", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


class CompanyOpenings(ModelAnswer):
    name: str
    openings: int = Field(default=0, ge=0)
    logo: str = ""


class JobTrendInsights(ModelAnswer):
    demand_score: int
    demand_trend: str = "stable"
    avg_salary: str = ""
    salary_range: str = ""
    open_positions: int = Field(default=0, ge=0)
    top_skills: list[SkillDemand] = Field(default_factory=list)
    top_companies: list[CompanyOpenings] = Field(default_factory=list)
    short_term_outlook: str = ""
    long_term_outlook: str = ""
    related_roles: list[str] = Field(default_factory=list)

    @field_validator("demand_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)

    @field_validator("related_roles", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)
