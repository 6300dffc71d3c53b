from fakes import prosody_payload, prosody_segment

from dream_analyzer.domain.models import EmotionIntensity, OverallTone, ProsodyInsight
from dream_analyzer.domain.prosody import (
    classify_overall_tone,
    describe_emotional_arc,
    extract_prosody_insights,
)


def _emotions(**scores: float) -> list[EmotionIntensity]:
    return [EmotionIntensity(emotion=name, intensity=value) for name, value in scores.items()]


def test_dominant_emotions_are_ranked_by_mean_score() -> None:
    insight = extract_prosody_insights(prosody_payload())

    names = [e.emotion for e in insight.dominant_emotions]
    assert names == ["Joy", "Interest", "Confusion"]
    assert insight.dominant_emotions[0].intensity == 0.7
    assert insight.dominant_emotions[1].intensity == 0.65


def test_dominant_emotions_are_capped_at_five() -> None:
    scores = {name: 0.1 * (i + 1) for i, name in enumerate(
        ["Joy", "Calmness", "Awe", "Fear", "Sadness", "Interest", "Boredom"]
    )}
    insight = extract_prosody_insights(prosody_payload([prosody_segment(0.0, scores)]))

    assert len(insight.dominant_emotions) == 5
    assert insight.dominant_emotions[0].emotion == "Boredom"


def test_hesitation_markers_use_segment_start_and_threshold() -> None:
    insight = extract_prosody_insights(prosody_payload())

    assert len(insight.hesitation_markers) == 1
    marker = insight.hesitation_markers[0]
    assert marker.time == 1.5
    assert marker.emotion == "Confusion"
    assert marker.intensity == 0.4


def test_hesitation_markers_are_capped_at_five() -> None:
    segments = [prosody_segment(float(i), {"Doubt": 0.9}) for i in range(8)]
    insight = extract_prosody_insights(prosody_payload(segments))

    assert len(insight.hesitation_markers) == 5
    assert [m.time for m in insight.hesitation_markers] == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_hesitation_marker_falls_back_to_segment_index_without_time() -> None:
    segments = [
        {"emotions": [{"name": "Joy", "score": 0.5}]},
        {"emotions": [{"name": "Anxiety", "score": 0.6}]},
    ]
    insight = extract_prosody_insights(prosody_payload(segments))

    assert insight.hesitation_markers[0].time == 1.0


def test_overall_tone_positive_when_clearly_ahead() -> None:
    assert classify_overall_tone(_emotions(Joy=0.8, Sadness=0.3)) is OverallTone.POSITIVE


def test_overall_tone_negative_when_clearly_ahead() -> None:
    assert classify_overall_tone(_emotions(Fear=0.6, Anger=0.3, Joy=0.4)) is OverallTone.NEGATIVE


def test_overall_tone_mixed_when_both_sides_are_strong() -> None:
    assert classify_overall_tone(_emotions(Joy=0.5, Sadness=0.4)) is OverallTone.MIXED


def test_overall_tone_neutral_at_the_margin_boundary() -> None:
    # positive exceeds negative by exactly the margin, which is not enough
    assert classify_overall_tone(_emotions(Joy=0.3, Sadness=0.1)) is OverallTone.NEUTRAL


def test_overall_tone_neutral_without_valenced_emotions() -> None:
    assert classify_overall_tone(_emotions(Calmness=0.9, Boredom=0.5)) is OverallTone.NEUTRAL


def test_emotional_arc_describes_change_between_first_and_last_segment() -> None:
    segments = [
        prosody_segment(0.0, {"Calmness": 0.7, "Fear": 0.2}),
        prosody_segment(2.0, {"Calmness": 0.1, "Fear": 0.9}),
    ]
    assert describe_emotional_arc(segments) == "Calmness shifting to Fear"
    assert describe_emotional_arc(segments[:1]) == "Steady Calmness"
    assert describe_emotional_arc([]) == ""


def test_empty_predictions_give_empty_insight() -> None:
    assert extract_prosody_insights(prosody_payload([])) == ProsodyInsight.empty()
    assert extract_prosody_insights([]) == ProsodyInsight.empty()


def test_malformed_predictions_give_empty_insight() -> None:
    assert extract_prosody_insights([{"results": {}}]) == ProsodyInsight.empty()
    assert extract_prosody_insights(None) == ProsodyInsight.empty()
    assert extract_prosody_insights([{"results": {"predictions": [{"models": {}}]}}]) == (
        ProsodyInsight.empty()
    )


def test_overall_tone_documented_boundaries() -> None:
    assert classify_overall_tone(_emotions(Joy=0.5, Sadness=0.2)) is OverallTone.POSITIVE
    assert classify_overall_tone(_emotions(Joy=0.35, Sadness=0.35)) is OverallTone.MIXED
    assert classify_overall_tone([]) is OverallTone.NEUTRAL
