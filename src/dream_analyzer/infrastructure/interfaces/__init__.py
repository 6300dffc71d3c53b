"""Infrastructure interface exports."""

from .image_service import ImageService
from .llm_service import LLMService
from .prosody_job_service import ProsodyJobService
from .storage_client import StorageClient
from .transcription_service import TranscriptionService

__all__ = [
    "ImageService",
    "LLMService",
    "ProsodyJobService",
    "StorageClient",
    "TranscriptionService",
]
