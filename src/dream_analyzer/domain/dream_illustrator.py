"""Best-effort illustration of an analysed dream."""

from ..infrastructure.interfaces import ImageService
from ..logging import setup_logging
from .analysis_contract import StructuredAnalysis
from .models import DreamImage, ImageStatus
from .prompts import MAX_IMAGE_PROMPT_LENGTH, build_image_prompt

logger = setup_logging()


class DreamIllustrator:
    """Derives a visual prompt from an analysis and requests one square image."""

    def __init__(self, image_service: ImageService, size: str = "1024x1024", style: str = "vivid"):
        self._image_service = image_service
        self._size = size
        self._style = style

    def illustrate(self, analysis: StructuredAnalysis) -> DreamImage:
        """Never raises; failures are reported as a DreamImage with status failed."""
        prompt = ""
        try:
            prompt = build_image_prompt(analysis)
            generated = self._image_service.generate(prompt, self._size, self._style)
            return DreamImage(
                url=generated.url,
                prompt=(generated.revised_prompt or prompt)[:MAX_IMAGE_PROMPT_LENGTH],
                status=ImageStatus.GENERATED,
            )
        except Exception as e:
            logger.warning("Dream image generation failed", extra={"error": str(e)})
            return DreamImage(url=None, prompt=prompt, status=ImageStatus.FAILED)
