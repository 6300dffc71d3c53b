"""Domain layer exports."""

from .analysis_contract import (
    DreamType,
    StructuredAnalysis,
    parse_structured_analysis,
    strip_code_fences,
)
from .models import (
    AudioResource,
    DreamImage,
    EmotionIntensity,
    GeneratedImage,
    HesitationMarker,
    ImageStatus,
    OverallTone,
    PipelineState,
    ProcessDreamRequest,
    ProcessDreamResult,
    ProsodyInsight,
    StageOutcome,
    StageStatus,
    TranscriptionResult,
    count_words,
    validate_duration,
)
from .prosody import classify_overall_tone, extract_prosody_insights

__all__ = [
    "AudioResource",
    "DreamImage",
    "DreamType",
    "EmotionIntensity",
    "GeneratedImage",
    "HesitationMarker",
    "ImageStatus",
    "OverallTone",
    "PipelineState",
    "ProcessDreamRequest",
    "ProcessDreamResult",
    "ProsodyInsight",
    "StageOutcome",
    "StageStatus",
    "StructuredAnalysis",
    "TranscriptionResult",
    "classify_overall_tone",
    "count_words",
    "extract_prosody_insights",
    "parse_structured_analysis",
    "strip_code_fences",
    "validate_duration",
]
