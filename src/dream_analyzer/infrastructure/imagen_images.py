"""Imagen implementation of the ImageService interface.

Imagen returns raw image bytes, so each image is stored in object storage
and exposed through a presigned URL.
"""

import io
from math import gcd
from uuid import uuid4

from google import genai

from ..domain.models import GeneratedImage
from ..exceptions import UpstreamServiceError
from ..logging import setup_logging
from .interfaces import ImageService, StorageClient

logger = setup_logging()

SERVICE_NAME = "imagen"


def aspect_ratio_for(size: str) -> str:
    """Converts a "WIDTHxHEIGHT" size into an aspect ratio such as "1:1"."""
    width, height = (int(part) for part in size.lower().split("x", 1))
    divisor = gcd(width, height)
    return f"{width // divisor}:{height // divisor}"


class ImagenImageService(ImageService):
    """Generates dream illustrations with Imagen and stores them in MinIO."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        storage: StorageClient,
        bucket_name: str,
    ):
        self._client = client
        self._model_name = model_name
        self._storage = storage
        self._bucket_name = bucket_name

    def generate(self, prompt: str, size: str, style: str) -> GeneratedImage:
        try:
            response = self._client.models.generate_images(
                model=self._model_name,
                prompt=f"{prompt} Rendered in a {style} style.",
                config={
                    "number_of_images": 1,
                    "aspect_ratio": aspect_ratio_for(size),
                    "output_mime_type": "image/png",
                    "enhance_prompt": True,
                },
            )
            if not response.generated_images:
                raise UpstreamServiceError(SERVICE_NAME, "Imagen returned no image")

            generated = response.generated_images[0]
            image_bytes = generated.image.image_bytes
            object_name = f"{uuid4()}.png"
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=io.BytesIO(image_bytes),
                size=len(image_bytes),
                content_type="image/png",
            )
            url = self._storage.presigned_url(self._bucket_name, object_name)
            logger.info("Dream image generated", extra={"object_name": object_name})
            return GeneratedImage(url=url, revised_prompt=generated.enhanced_prompt)
        except UpstreamServiceError:
            raise
        except Exception as e:
            logger.exception("Imagen generation failed")
            raise UpstreamServiceError(SERVICE_NAME, f"Image generation failed: {e}", e) from e
