"""FastAPI dependency injection configuration.

Clients are built lazily on first use so the application can be imported
without live services.
"""

from contextlib import contextmanager
from datetime import timedelta
from functools import lru_cache
from typing import Iterator

import assemblyai as aai
from google import genai
from minio import Minio
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from .config import AppConfig, load_config
from .domain.dream_analyzer import DreamAnalyzer
from .domain.dream_illustrator import DreamIllustrator
from .domain.prompts import load_system_instruction
from .domain.prosody_job import ProsodyJobClient
from .handlers import AudioStore, DreamJournal, DreamPipelineHandler
from .infrastructure import (
    AssemblyAITranscriber,
    GeminiLLMService,
    HumeProsodyJobService,
    ImagenImageService,
    MinioStorageClient,
    build_hume_client,
)
from .infrastructure.interfaces import StorageClient, TranscriptionService
from .logging import setup_logging
from .repositories import DreamRepository

logger = setup_logging()


@lru_cache
def get_config() -> AppConfig:
    return load_config()


@lru_cache
def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    config = get_config()
    minio_client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    return MinioStorageClient(
        minio_client, url_ttl=timedelta(hours=config.minio.image_url_ttl_hours)
    )


@lru_cache
def get_engine() -> Engine:
    return create_engine(get_config().database.url, pool_pre_ping=True)


@contextmanager
def session_factory() -> Iterator[Session]:
    """Yields a database session, ensuring proper cleanup."""
    with Session(get_engine(), expire_on_commit=False) as session:
        yield session


@lru_cache
def get_repository() -> DreamRepository:
    return DreamRepository(session_factory)


@lru_cache
def get_transcription_service() -> TranscriptionService:
    config = get_config()
    aai.settings.api_key = config.assemblyai.api_key
    transcriber = aai.Transcriber(
        config=aai.TranscriptionConfig(language_code=config.assemblyai.language_code)
    )
    return AssemblyAITranscriber(transcriber)


@lru_cache
def get_genai_client() -> genai.Client:
    return genai.Client(api_key=get_config().gemini.api_key)


@lru_cache
def get_analyzer() -> DreamAnalyzer:
    config = get_config()
    return DreamAnalyzer(
        llm_service=GeminiLLMService(get_genai_client(), config.gemini.model_name),
        system_instruction=load_system_instruction(),
        temperature=config.gemini.temperature,
        max_tokens=config.gemini.max_output_tokens,
    )


@lru_cache
def get_prosody_client() -> ProsodyJobClient:
    hume = get_config().hume
    service = None
    if hume.configured:
        service = HumeProsodyJobService(
            build_hume_client(hume.api_key, hume.base_url, hume.request_timeout_seconds)
        )
    else:
        logger.info("Prosody analysis disabled, no Hume API key configured")
    return ProsodyJobClient(
        service,
        poll_interval_seconds=hume.poll_interval_seconds,
        timeout_seconds=hume.timeout_seconds,
    )


@lru_cache
def get_illustrator() -> DreamIllustrator | None:
    config = get_config()
    if not config.imagen.enabled:
        logger.info("Dream image generation disabled")
        return None
    image_service = ImagenImageService(
        client=get_genai_client(),
        model_name=config.imagen.model_name,
        storage=get_storage(),
        bucket_name=config.minio.image_bucket_name,
    )
    return DreamIllustrator(image_service, size=config.imagen.size, style=config.imagen.style)


@lru_cache
def get_audio_store() -> AudioStore:
    config = get_config()
    return AudioStore(get_storage(), config.minio.audio_bucket_name, config.max_upload_bytes)


def get_pipeline_handler() -> DreamPipelineHandler:
    return DreamPipelineHandler(
        audio_store=get_audio_store(),
        transcription_service=get_transcription_service(),
        prosody_client=get_prosody_client(),
        analyzer=get_analyzer(),
        illustrator=get_illustrator(),
        repository=get_repository(),
    )


def get_journal() -> DreamJournal:
    return DreamJournal(get_repository())
