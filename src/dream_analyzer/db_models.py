from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DreamRecord(SQLModel, table=True):
    __tablename__ = "dreams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: str = Field(index=True, max_length=255)
    title: str = Field(max_length=255)
    transcript: str = Field(sa_column=Column(Text, nullable=False))
    word_count: int
    duration_seconds: float
    emotional_tone: Optional[str] = Field(default=None, sa_column=Column(Text))
    dream_type: Optional[str] = Field(default=None, max_length=32)
    dream_type_confidence: Optional[float] = None
    analysis: Dict[str, Any] = Field(sa_column=Column(JSONDocument, nullable=False))
    prosody: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSONDocument, nullable=True)
    )
    dream_image: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSONDocument, nullable=True)
    )
    is_archived: bool = False
    is_private: bool = False
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
