"""Reduction of raw prosody predictions into a compact ProsodyInsight."""

from collections import defaultdict
from statistics import fmean
from typing import Any

from ..logging import setup_logging
from .models import EmotionIntensity, HesitationMarker, OverallTone, ProsodyInsight

logger = setup_logging()

MAX_DOMINANT_EMOTIONS = 5
MAX_HESITATION_MARKERS = 5
HESITATION_THRESHOLD = 0.3
TONE_MARGIN = 0.2
MIXED_THRESHOLD = 0.3

HESITATION_EMOTIONS = frozenset({"Confusion", "Doubt", "Anxiety"})
POSITIVE_EMOTIONS = frozenset({"Joy", "Interest", "Amusement", "Excitement", "Love"})
NEGATIVE_EMOTIONS = frozenset({"Sadness", "Anger", "Fear", "Disgust", "Anxiety"})


def flatten_predictions(raw: Any) -> list[dict[str, Any]]:
    """
    Collects every prosody prediction across all sources, files and groups.

    Expected shape (batch job predictions):
        [{"results": {"predictions": [{"models": {"prosody":
            {"grouped_predictions": [{"predictions": [...]}]}}}]}}]
    """
    predictions: list[dict[str, Any]] = []
    for source in raw:
        for file_prediction in source["results"]["predictions"]:
            groups = file_prediction["models"]["prosody"]["grouped_predictions"]
            for group in groups:
                predictions.extend(group["predictions"])
    return predictions


def classify_overall_tone(emotions: list[EmotionIntensity]) -> OverallTone:
    """Classifies the dominant emotions as positive, negative, mixed or neutral."""
    positive = sum(e.intensity for e in emotions if e.emotion in POSITIVE_EMOTIONS)
    negative = sum(e.intensity for e in emotions if e.emotion in NEGATIVE_EMOTIONS)

    if positive > negative + TONE_MARGIN:
        return OverallTone.POSITIVE
    if negative > positive + TONE_MARGIN:
        return OverallTone.NEGATIVE
    if positive > MIXED_THRESHOLD and negative > MIXED_THRESHOLD:
        return OverallTone.MIXED
    return OverallTone.NEUTRAL


def _top_emotion(prediction: dict[str, Any]) -> str | None:
    emotions = prediction["emotions"]
    if not emotions:
        return None
    return max(emotions, key=lambda e: float(e["score"]))["name"]


def describe_emotional_arc(predictions: list[dict[str, Any]]) -> str:
    """Summarises how the strongest emotion moved from the first to the last segment."""
    if not predictions:
        return ""
    opening = _top_emotion(predictions[0])
    closing = _top_emotion(predictions[-1])
    if opening is None or closing is None:
        return ""
    if opening == closing:
        return f"Steady {opening}"
    return f"{opening} shifting to {closing}"


def _reduce(raw: Any) -> ProsodyInsight:
    predictions = flatten_predictions(raw)
    if not predictions:
        return ProsodyInsight.empty()

    scores: dict[str, list[float]] = defaultdict(list)
    markers: list[HesitationMarker] = []

    for index, prediction in enumerate(predictions):
        time = (prediction.get("time") or {}).get("begin")
        for emotion in prediction["emotions"]:
            name = emotion["name"]
            score = float(emotion["score"])
            scores[name].append(score)
            if (
                name in HESITATION_EMOTIONS
                and score > HESITATION_THRESHOLD
                and len(markers) < MAX_HESITATION_MARKERS
            ):
                markers.append(
                    HesitationMarker(
                        time=float(time) if time is not None else float(index),
                        emotion=name,
                        intensity=round(score, 2),
                    )
                )

    means = sorted(
        ((name, fmean(values)) for name, values in scores.items()),
        key=lambda item: item[1],
        reverse=True,
    )
    dominant = [
        EmotionIntensity(emotion=name, intensity=round(mean, 2))
        for name, mean in means[:MAX_DOMINANT_EMOTIONS]
    ]

    return ProsodyInsight(
        dominant_emotions=dominant,
        overall_tone=classify_overall_tone(dominant),
        emotional_arc=describe_emotional_arc(predictions),
        hesitation_markers=markers,
    )


def extract_prosody_insights(raw: Any) -> ProsodyInsight:
    """
    Reduces raw batch-job predictions into a ProsodyInsight.

    Never raises: malformed or partial data yields the empty default insight.
    """
    try:
        return _reduce(raw)
    except Exception:
        logger.exception("Prosody reduction failed, using empty insight")
        return ProsodyInsight.empty()
