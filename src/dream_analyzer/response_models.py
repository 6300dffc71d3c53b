"""Request and response models for the dream API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .db_models import DreamRecord


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DreamUpdate(_ApiModel):
    """Fields a dream owner may change after creation."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    is_archived: bool | None = None
    is_private: bool | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class AnalyzeTranscriptRequest(_ApiModel):
    transcript: str
    duration: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)


class DreamResponse(_ApiModel):
    """A persisted dream as returned to its owner."""

    id: UUID
    title: str
    transcript: str
    word_count: int
    recording_duration: float
    emotional_tone: str | None = None
    dream_type: str | None = None
    dream_type_confidence: float | None = None
    analysis: dict[str, Any]
    prosody: dict[str, Any] | None = None
    dream_image: dict[str, Any] | None = None
    is_archived: bool
    is_private: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: DreamRecord) -> "DreamResponse":
        return cls(
            id=record.id,
            title=record.title,
            transcript=record.transcript,
            word_count=record.word_count,
            recording_duration=record.duration_seconds,
            emotional_tone=record.emotional_tone,
            dream_type=record.dream_type,
            dream_type_confidence=record.dream_type_confidence,
            analysis=record.analysis,
            prosody=record.prosody,
            dream_image=record.dream_image,
            is_archived=record.is_archived,
            is_private=record.is_private,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class HealthResponse(BaseModel):
    status: str
