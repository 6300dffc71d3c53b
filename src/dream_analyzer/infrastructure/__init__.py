"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_llm import GeminiLLMService
from .hume_prosody import HumeProsodyJobService, build_hume_client
from .imagen_images import ImagenImageService
from .minio_storage import MinioStorageClient

__all__ = [
    "AssemblyAITranscriber",
    "GeminiLLMService",
    "HumeProsodyJobService",
    "ImagenImageService",
    "MinioStorageClient",
    "build_hume_client",
]
