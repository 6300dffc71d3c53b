"""Abstract interface for image-synthesis backends."""

from abc import ABC, abstractmethod

from ...domain.models import GeneratedImage


class ImageService(ABC):
    """Generates a single image for a text prompt."""

    @abstractmethod
    def generate(self, prompt: str, size: str, style: str) -> GeneratedImage:
        """
        Generates one image.

        Args:
            prompt: Visual description of the image.
            size: Requested dimensions, e.g. "1024x1024".
            style: Rendering style hint, e.g. "vivid".

        Raises:
            UpstreamServiceError: If generation fails.
        """
