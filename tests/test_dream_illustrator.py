import json

from fakes import FakeImageService, analysis_document

from dream_analyzer.domain.analysis_contract import parse_structured_analysis
from dream_analyzer.domain.dream_illustrator import DreamIllustrator
from dream_analyzer.domain.models import ImageStatus
from dream_analyzer.domain.prompts import build_image_prompt
from dream_analyzer.exceptions import UpstreamServiceError


def _analysis(**overview):
    return parse_structured_analysis(json.dumps(analysis_document(**overview)))


def test_image_prompt_mentions_title_tone_and_settings() -> None:
    prompt = build_image_prompt(_analysis())

    assert "The Glass City" in prompt
    assert "Awe mixed with unease" in prompt
    assert "glass city" in prompt


def test_image_prompt_is_capped_at_one_thousand_characters() -> None:
    prompt = build_image_prompt(_analysis(summary="shards " * 400))

    assert len(prompt) == 1000


def test_successful_generation_returns_generated_image() -> None:
    service = FakeImageService(revised_prompt="A luminous glass skyline at dusk")

    image = DreamIllustrator(service).illustrate(_analysis())

    assert image.status is ImageStatus.GENERATED
    assert image.url == "https://storage.local/dream-images/1.png"
    assert image.prompt == "A luminous glass skyline at dusk"


def test_original_prompt_is_kept_without_revision() -> None:
    service = FakeImageService()

    image = DreamIllustrator(service).illustrate(_analysis())

    assert image.prompt == service.prompts[0]


def test_generation_failure_is_reported_not_raised() -> None:
    service = FakeImageService(error=UpstreamServiceError("imagen", "blocked"))

    image = DreamIllustrator(service).illustrate(_analysis())

    assert image.status is ImageStatus.FAILED
    assert image.url is None
    assert image.prompt.startswith("A surreal, dreamlike illustration")
