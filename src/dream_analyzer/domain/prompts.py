"""Prompt composition for the analysis and illustration stages."""

from pathlib import Path

from .analysis_contract import StructuredAnalysis

MAX_IMAGE_PROMPT_LENGTH = 1000
SYSTEM_PROMPT_PATH = Path(__file__).resolve().parent.parent / "prompts" / "system.txt"

OUTPUT_SHAPE = """{
  "overview": {
    "title": "An evocative 3-6 word title",
    "emotionalTone": "Short description of the overall emotional quality",
    "dreamType": "Resolution | Replay | Residual | Generative | Lucid",
    "dreamTypeConfidence": 0.0-1.0,
    "summary": "2-3 sentence narrative summary"
  },
  "manifestContent": {
    "characters": [{"name": "", "role": "", "familiarity": "Familiar | Unfamiliar | Self"}],
    "settings": [{"location": "", "familiarity": "Familiar | Unfamiliar | Hybrid"}],
    "actions": [""],
    "emotions": [{"emotion": "", "intensity": 1-5, "context": ""}],
    "schredlScales": {
      "dreamLength": {"value": <word count>, "label": "Short | Medium | Long", "interpretation": ""},
      "realism": {"value": 1-5, "label": "", "interpretation": ""},
      "emotionalIntensityPositive": {"value": 0-5, "label": "", "interpretation": ""},
      "emotionalIntensityNegative": {"value": 0-5, "label": "", "interpretation": ""},
      "clarity": {"value": 1-5, "label": "", "interpretation": ""},
      "selfParticipation": {"value": 1-5, "label": "", "interpretation": ""},
      "socialDensity": {"value": 1-5, "label": "", "interpretation": ""},
      "agency": {"value": 1-5, "label": "", "interpretation": ""},
      "narrativeCoherence": {"value": 1-5, "label": "", "interpretation": ""}
    }
  },
  "cdtAnalysis": {
    "vaultActivation": {"assessment": "", "recentMemories": [""], "distantMemories": [""], "interpretation": ""},
    "cognitiveDrift": {"themes": [{"theme": "", "confidence": 0.0-1.0}], "interpretation": ""},
    "convergenceIndicators": {"present": true, "evidence": "", "resolutionType": ""},
    "dreamTypeRationale": ""
  },
  "archetypalResonances": {
    "threshold": {"present": true, "elements": [""], "reflection": "" or null},
    "shadow": {"present": true, "elements": [""], "reflection": "" or null},
    "animaAnimus": {"present": true, "elements": [""], "reflection": "" or null},
    "selfWholeness": {"present": true, "elements": [""], "reflection": "" or null},
    "scenarios": [{"name": "", "description": ""}]
  },
  "reflectivePrompts": [
    {"category": "Exploration | Emotional | Action-oriented | Integration", "prompt": "", "dreamConnection": ""}
  ]
}"""

GUIDELINES = """Guidelines:
- Use non-prescriptive language ("may reflect", "could relate to", "might suggest").
- The dreamer remains the final authority on meaning.
- Ground every interpretation in the CDT, Schredl and Jungian frameworks."""


def load_system_instruction(path: Path = SYSTEM_PROMPT_PATH) -> str:
    return path.read_text(encoding="utf-8").strip()


def build_analysis_prompt(transcript: str, duration_seconds: float, word_count: int) -> str:
    """Builds the user prompt embedding the transcript and the required output shape."""
    duration = f"{duration_seconds:g} seconds" if duration_seconds else "Unknown"
    return (
        "Analyze the following dream transcript and return a structured analysis.\n\n"
        f"DREAM TRANSCRIPT:\n{transcript}\n\n"
        f"RECORDING DURATION: {duration}\n"
        f"WORD COUNT: {word_count}\n\n"
        "Respond ONLY with JSON in exactly this shape:\n"
        f"{OUTPUT_SHAPE}\n\n"
        f"{GUIDELINES}"
    )


def build_image_prompt(analysis: StructuredAnalysis) -> str:
    """Composes a visual prompt from the analysis, capped at MAX_IMAGE_PROMPT_LENGTH."""
    overview = analysis.overview
    locations = ", ".join(s.location for s in analysis.manifest_content.settings)
    prompt = (
        f'A surreal, dreamlike illustration of a dream titled "{overview.title}". '
        f"{overview.summary} "
        f"Emotional tone: {overview.emotional_tone}."
    )
    if locations:
        prompt += f" Settings: {locations}."
    return prompt[:MAX_IMAGE_PROMPT_LENGTH]
