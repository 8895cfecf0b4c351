from __future__ import annotations

from pydantic import BaseModel, field_validator

SOURCE_TYPES = {"pdf", "docx", "txt"}


class ExtractedDocument(BaseModel):
    source_type: str
    text: str
    extractor: str

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in SOURCE_TYPES:
            raise ValueError("source_type must be one of: pdf, docx, txt")
        return normalized

    @property
    def characters(self) -> int:
        return len(self.text.strip())
