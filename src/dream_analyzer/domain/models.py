"""Domain models for the dream-processing pipeline."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..exceptions import InputError
from .analysis_contract import StructuredAnalysis

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model that serialises field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AudioResource(BaseModel, frozen=True):
    """An uploaded recording held in object storage until the pipeline releases it."""

    bucket_name: str
    object_name: str
    content_type: str = "audio/webm"
    size_bytes: int = Field(ge=0)
    duration_seconds: float = 0.0


class TranscriptionResult(BaseModel, frozen=True):
    """Text produced by the speech-to-text stage."""

    text: str
    word_count: int

    @classmethod
    def from_text(cls, text: str) -> "TranscriptionResult":
        return cls(text=text, word_count=count_words(text))


def count_words(text: str) -> int:
    """Counts whitespace-delimited, non-empty tokens."""
    return len(text.split())


def validate_duration(duration_seconds: float) -> float:
    """
    Checks a caller-declared recording duration.

    Raises:
        InputError: If the duration is negative, NaN or infinite.
    """
    if not math.isfinite(duration_seconds) or duration_seconds < 0:
        raise InputError("Recording duration must be a finite, non-negative number of seconds")
    return duration_seconds


class OverallTone(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    MIXED = "Mixed"


class EmotionIntensity(CamelModel, frozen=True):
    emotion: str
    intensity: float = Field(ge=0.0, le=1.0)


class HesitationMarker(CamelModel, frozen=True):
    time: float
    emotion: str
    intensity: float


class ProsodyInsight(CamelModel, frozen=True):
    """Compact summary of the emotional prosody of a recording."""

    dominant_emotions: list[EmotionIntensity] = Field(default_factory=list, max_length=5)
    overall_tone: OverallTone = OverallTone.NEUTRAL
    emotional_arc: str = ""
    hesitation_markers: list[HesitationMarker] = Field(default_factory=list, max_length=5)

    @classmethod
    def empty(cls) -> "ProsodyInsight":
        return cls()


class ImageStatus(str, Enum):
    GENERATED = "generated"
    PENDING = "pending"
    FAILED = "failed"


class DreamImage(CamelModel, frozen=True):
    url: str | None = None
    prompt: str = Field(default="", max_length=1000)
    status: ImageStatus


class GeneratedImage(BaseModel, frozen=True):
    """Raw result returned by an image-synthesis backend."""

    url: str
    revised_prompt: str | None = None


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StageOutcome(Generic[T]):
    """Tagged result of a best-effort pipeline stage."""

    status: StageStatus
    value: T | None = None
    reason: str | None = None

    @classmethod
    def success(cls, value: T) -> "StageOutcome[T]":
        return cls(StageStatus.SUCCEEDED, value=value)

    @classmethod
    def skipped(cls, reason: str) -> "StageOutcome[T]":
        return cls(StageStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "StageOutcome[T]":
        return cls(StageStatus.FAILED, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.status is StageStatus.SUCCEEDED


class PipelineState(str, Enum):
    RECEIVED = "received"
    TRANSCRIBING = "transcribing"
    PROSODY_ANALYZING = "prosody_analyzing"
    ANALYZING = "analyzing"
    IMAGE_SYNTHESIZING = "image_synthesizing"
    PERSISTING = "persisting"
    DONE = "done"
    ABORTED = "aborted"


class ProcessDreamRequest(BaseModel, frozen=True):
    """Input handed to the pipeline by the transport layer."""

    audio: AudioResource
    owner_id: str = Field(min_length=1)

    @property
    def duration_seconds(self) -> float:
        return self.audio.duration_seconds


class ProcessDreamResult(CamelModel, frozen=True):
    """Response returned to the caller after a successful pipeline run."""

    transcript: str
    word_count: int
    recording_duration: float
    analysis: StructuredAnalysis
    prosody: ProsodyInsight | None = None
    dream_image: DreamImage | None = None
    dream_id: UUID

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
