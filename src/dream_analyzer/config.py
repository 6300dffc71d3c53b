"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field

MAX_UPLOAD_BYTES = 25 * 1024 * 1024


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    secure: bool = False
    audio_bucket_name: str = "dream-audio"
    image_bucket_name: str = "dream-images"
    image_url_ttl_hours: int = 24 * 7


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language_code: str = "en"


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    temperature: float = 0.7
    max_output_tokens: int = 4000


class ImagenConfig(BaseModel, frozen=True):
    """Imagen image-synthesis configuration."""

    enabled: bool = True
    model_name: str = "imagen-3.0-generate-002"
    size: str = "1024x1024"
    style: str = "vivid"


class HumeConfig(BaseModel, frozen=True):
    """Hume batch prosody configuration. An empty key disables the stage."""

    api_key: str = ""
    base_url: str = "https://api.hume.ai"
    poll_interval_seconds: float = 2.0
    timeout_seconds: float = 30.0
    request_timeout_seconds: float = 30.0

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    database: DatabaseConfig
    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    imagen: ImagenConfig
    hume: HumeConfig
    max_upload_bytes: int = MAX_UPLOAD_BYTES


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            secure=_env_flag("MINIO_SECURE", "false"),
        ),
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "dream_analyzer"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash"),
        ),
        imagen=ImagenConfig(
            enabled=_env_flag("IMAGE_GENERATION_ENABLED", "true"),
            model_name=os.getenv("IMAGEN_MODEL_NAME", "imagen-3.0-generate-002"),
        ),
        hume=HumeConfig(
            api_key=os.getenv("HUME_API_KEY", ""),
            base_url=os.getenv("HUME_BASE_URL", "https://api.hume.ai"),
        ),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES))),
    )
