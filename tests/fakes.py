"""In-memory stand-ins for the pipeline's collaborators and sample payloads."""

from typing import Any

from dream_analyzer.domain.models import GeneratedImage, TranscriptionResult
from dream_analyzer.exceptions import StorageDeleteError
from dream_analyzer.infrastructure.interfaces import (
    ImageService,
    LLMService,
    ProsodyJobService,
    StorageClient,
    TranscriptionService,
)


class InMemoryStorage(StorageClient):
    def __init__(self, fail_remove: bool = False):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.removed: list[str] = []
        self.downloads = 0
        self.fail_remove = fail_remove

    def download(self, bucket_name, object_name):
        self.downloads += 1
        return self.objects[(bucket_name, object_name)]

    def upload(self, bucket_name, object_name, data, size, content_type):
        self.objects[(bucket_name, object_name)] = data.read(size)

    def remove(self, bucket_name, object_name):
        self.removed.append(object_name)
        if self.fail_remove:
            raise StorageDeleteError(object_name)
        self.objects.pop((bucket_name, object_name), None)

    def presigned_url(self, bucket_name, object_name):
        return f"https://storage.local/{bucket_name}/{object_name}"

    def ensure_bucket_exists(self, bucket_name):
        pass


class FakeTranscriber(TranscriptionService):
    def __init__(self, text: str = "I was flying over a city made of glass", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def transcribe(self, audio_data):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return TranscriptionResult.from_text(self.text)


class FakeProsodyService(ProsodyJobService):
    def __init__(
        self,
        statuses=("COMPLETED",),
        predictions=None,
        submit_error=None,
        clock=None,
        status_latency=0.0,
    ):
        self.statuses = list(statuses)
        self.payload = predictions if predictions is not None else prosody_payload()
        self.submit_error = submit_error
        self.status_calls = 0
        self.status_timeouts: list[float | None] = []
        self._clock = clock
        self._status_latency = status_latency

    def submit(self, audio_data, file_name, content_type):
        if self.submit_error is not None:
            raise self.submit_error
        return "job-1"

    def status(self, job_id, timeout=None):
        self.status_calls += 1
        self.status_timeouts.append(timeout)
        if self._clock is not None:
            # a slow backend answers no later than the request timeout
            latency = self._status_latency
            self._clock.now += latency if timeout is None else min(latency, timeout)
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    def predictions(self, job_id):
        return self.payload


class FakeLLM(LLMService):
    def __init__(self, response: str = "", error=None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def generate(self, system_instruction, user_prompt, temperature, max_tokens):
        self.calls.append(
            {
                "system_instruction": system_instruction,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


class FakeImageService(ImageService):
    def __init__(self, url="https://storage.local/dream-images/1.png", revised_prompt=None, error=None):
        self.url = url
        self.revised_prompt = revised_prompt
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt, size, style):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return GeneratedImage(url=self.url, revised_prompt=self.revised_prompt)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def prosody_segment(begin: float, scores: dict[str, float]) -> dict[str, Any]:
    return {
        "time": {"begin": begin, "end": begin + 1.0},
        "emotions": [{"name": name, "score": score} for name, score in scores.items()],
    }


def prosody_payload(segments=None) -> list[dict[str, Any]]:
    if segments is None:
        segments = [
            prosody_segment(0.0, {"Joy": 0.8, "Interest": 0.6, "Confusion": 0.1}),
            prosody_segment(1.5, {"Joy": 0.6, "Interest": 0.7, "Confusion": 0.4}),
        ]
    return [
        {
            "results": {
                "predictions": [
                    {"models": {"prosody": {"grouped_predictions": [{"predictions": segments}]}}}
                ]
            }
        }
    ]


def _scale(value: int, label: str) -> dict[str, Any]:
    return {"value": value, "label": label, "interpretation": ""}


def analysis_document(**overview_overrides) -> dict[str, Any]:
    overview = {
        "title": "The Glass City",
        "emotionalTone": "Awe mixed with unease",
        "dreamType": "Generative",
        "dreamTypeConfidence": 0.72,
        "summary": "The dreamer flies over a city of glass that slowly cracks.",
    }
    overview.update(overview_overrides)
    return {
        "overview": overview,
        "manifestContent": {
            "characters": [{"name": "Guide", "role": "companion", "familiarity": "unknown"}],
            "settings": [{"location": "glass city", "familiarity": "novel"}],
            "actions": ["flying"],
            "emotions": [{"emotion": "awe", "intensity": 0.8, "context": "above the towers"}],
            "schredlScales": {
                "dreamLength": _scale(2, "medium"),
                "realism": _scale(1, "bizarre"),
                "emotionalIntensityPositive": _scale(2, "moderate"),
                "emotionalIntensityNegative": _scale(1, "mild"),
                "clarity": _scale(3, "vivid"),
                "selfParticipation": _scale(3, "active"),
                "socialDensity": _scale(1, "sparse"),
                "agency": _scale(2, "partial"),
                "narrativeCoherence": _scale(2, "loose"),
            },
        },
        "cdtAnalysis": {
            "vaultActivation": {
                "assessment": "Distant memories dominate",
                "recentMemories": [],
                "distantMemories": ["childhood rooftop"],
                "interpretation": "",
            },
            "cognitiveDrift": {
                "themes": [{"theme": "fragility", "confidence": 0.6}],
                "interpretation": "",
            },
            "convergenceIndicators": {"present": False, "evidence": "", "resolutionType": None},
            "dreamTypeRationale": "Novel recombination of remote material",
        },
        "archetypalResonances": {
            "threshold": {"present": True, "elements": ["city gate"], "reflection": None},
            "shadow": {"present": False, "elements": [], "reflection": None},
            "animaAnimus": {"present": False, "elements": [], "reflection": None},
            "selfWholeness": {"present": True, "elements": ["flight"], "reflection": None},
            "scenarios": [{"name": "Flying", "description": "Rising above the world"}],
        },
        "reflectivePrompts": [
            {"category": "feeling", "prompt": "What felt fragile?", "dreamConnection": "glass"}
        ],
    }

