from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from .common import CamelModel, ModelAnswer, Scalar, as_text, flatten_strings

InterviewType = Literal["behavioral", "technical", "coding"]


class LearningGuideRequest(CamelModel):
    target_role: str = Field(min_length=1, max_length=200)
    current_skills: str = Field(default="", max_length=4000)
    user_id: str | None = Field(default=None, max_length=200)


class Course(ModelAnswer):
    id: str
    title: str = Field(min_length=1)
    platform: str = ""
    duration: str = ""
    level: str = ""

    @field_validator("id", "duration", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return as_text(value)


class LearningGuide(ModelAnswer):
    skill_gaps: list[str] = Field(default_factory=list)
    courses: list[Course] = Field(min_length=1)
    certifications: list[str] = Field(default_factory=list)

    @field_validator("skill_gaps", "certifications", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class MarkCompleteRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=200)
    course_id: Scalar

    @field_validator("course_id", mode="after")
    @classmethod
    def _text(cls, value: Any) -> str:
        text = as_text(value)
        if not text:
            raise ValueError("courseId must not be empty")
        return text


class LearningProgressResponse(CamelModel):
    completed: list[str]


class InterviewQuestionRequest(CamelModel):
    type: str = "behavioral"
    user_id: str | None = None


class InterviewFeedbackRequest(CamelModel):
    question: str = Field(min_length=1, max_length=2000)
    transcript: str = Field(default="", max_length=20000)
    type: str = "behavioral"
    user_id: str | None = None


class InterviewFeedback(ModelAnswer):
    score: int
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    suggested_answer: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("score must be a number") from exc
        return int(round(min(10, max(1, number))))

    @field_validator("strengths", "improvements", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)


class QuizRequest(CamelModel):
    topic: str = Field(default="General Tech", min_length=1, max_length=200)
    count: int = Field(default=5, ge=3, le=10)
    difficulty: Literal["easy", "medium", "hard"] = "medium"


class QuizQuestion(ModelAnswer):
    id: int
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=2, max_length=6)
    answer: str

    @field_validator("options", mode="before")
    @classmethod
    def _strings(cls, value: Any) -> list[str]:
        return flatten_strings(value)

    @model_validator(mode="after")
    def _answer_is_an_option(self) -> "QuizQuestion":
        if self.answer not in self.options:
            raise ValueError("answer must be one of the options")
        return self


class Quiz(ModelAnswer):
    topic: str = ""
    questions: list[QuizQuestion] = Field(min_length=1)
