"""Pydantic contract for the structured dream analysis returned by the LLM.

The model output is requested in camelCase JSON. Every group is required;
list members default to empty so a sparse but well-formed answer still
validates. Confidence values are clamped into [0, 1].
"""

import json
import re
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from ..exceptions import AnalysisParseError

_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\r?\n?", re.IGNORECASE)


class _ContractModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def _clamp_unit(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return max(0.0, min(1.0, float(value)))
    return value


class DreamType(str, Enum):
    RESOLUTION = "Resolution"
    REPLAY = "Replay"
    RESIDUAL = "Residual"
    GENERATIVE = "Generative"
    LUCID = "Lucid"


class Overview(_ContractModel):
    title: str
    emotional_tone: str
    dream_type: DreamType
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        validation_alias=AliasChoices("dreamTypeConfidence", "confidence"),
        serialization_alias="dreamTypeConfidence",
    )
    summary: str

    @field_validator("dream_type", mode="before")
    @classmethod
    def normalize_dream_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            for member in DreamType:
                if member.value.lower() == value.strip().lower():
                    return member
        return value

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> Any:
        return _clamp_unit(value)


class Character(_ContractModel):
    name: str
    role: str = ""
    familiarity: str = ""


class Setting(_ContractModel):
    location: str
    familiarity: str = ""


class ManifestEmotion(_ContractModel):
    emotion: str
    intensity: float
    context: str = ""


class ScaleReading(_ContractModel):
    value: float
    label: str
    interpretation: str = ""


class SchredlScales(_ContractModel):
    dream_length: ScaleReading
    realism: ScaleReading
    emotional_intensity_positive: ScaleReading
    emotional_intensity_negative: ScaleReading
    clarity: ScaleReading
    self_participation: ScaleReading
    social_density: ScaleReading
    agency: ScaleReading
    narrative_coherence: ScaleReading


class ManifestContent(_ContractModel):
    characters: list[Character] = Field(default_factory=list)
    settings: list[Setting] = Field(default_factory=list)
    actions: list[str] = Field(default_factory=list)
    emotions: list[ManifestEmotion] = Field(default_factory=list)
    schredl_scales: SchredlScales


class VaultActivation(_ContractModel):
    assessment: str
    recent_memories: list[str] = Field(default_factory=list)
    distant_memories: list[str] = Field(default_factory=list)
    interpretation: str = ""


class DriftTheme(_ContractModel):
    theme: str
    confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp_confidence(cls, value: Any) -> Any:
        return _clamp_unit(value)


class CognitiveDrift(_ContractModel):
    themes: list[DriftTheme] = Field(default_factory=list)
    interpretation: str = ""


class ConvergenceIndicators(_ContractModel):
    present: bool
    evidence: str = ""
    resolution_type: str | None = None


class CdtAnalysis(_ContractModel):
    vault_activation: VaultActivation
    cognitive_drift: CognitiveDrift
    convergence_indicators: ConvergenceIndicators
    dream_type_rationale: str


class ArchetypeSlot(_ContractModel):
    present: bool
    elements: list[str] = Field(default_factory=list)
    reflection: str | None = None


class ArchetypalScenario(_ContractModel):
    name: str
    description: str = ""


class ArchetypalResonances(_ContractModel):
    threshold: ArchetypeSlot
    shadow: ArchetypeSlot
    anima_animus: ArchetypeSlot
    self_wholeness: ArchetypeSlot
    scenarios: list[ArchetypalScenario] = Field(default_factory=list)


class ReflectivePrompt(_ContractModel):
    category: str
    prompt: str
    dream_connection: str = ""


class StructuredAnalysis(_ContractModel):
    """The full CDT / Schredl / Jungian analysis of a single dream."""

    overview: Overview
    manifest_content: ManifestContent
    cdt_analysis: CdtAnalysis
    archetypal_resonances: ArchetypalResonances
    reflective_prompts: list[ReflectivePrompt] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Returns the camelCase JSON document stored with the dream record."""
        return self.model_dump(mode="json", by_alias=True)


def strip_code_fences(payload: str) -> str:
    """Removes ``` and ```json fences the model may wrap around its JSON."""
    return _FENCE_PATTERN.sub("", payload).strip()


def parse_structured_analysis(payload: str) -> StructuredAnalysis:
    """
    Parses raw LLM text into a validated StructuredAnalysis.

    Raises:
        AnalysisParseError: If the text is not JSON or does not match the contract.
    """
    cleaned = strip_code_fences(payload or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AnalysisParseError(f"Analysis response is not valid JSON: {e}", e) from e

    try:
        return StructuredAnalysis.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(
            f"Analysis response does not match the expected shape: "
            f"{e.error_count()} validation error(s)",
            e,
        ) from e
