import io
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import assemblyai as aai
import pytest
from fakes import InMemoryStorage

from dream_analyzer.exceptions import StorageDeleteError, UpstreamServiceError
from dream_analyzer.infrastructure import (
    AssemblyAITranscriber,
    GeminiLLMService,
    ImagenImageService,
    MinioStorageClient,
)
from dream_analyzer.infrastructure.imagen_images import aspect_ratio_for


def test_assemblyai_returns_trimmed_text_with_word_count() -> None:
    transcriber = MagicMock()
    transcriber.transcribe.return_value = SimpleNamespace(
        status=aai.TranscriptStatus.completed, text="  I was falling slowly  ", error=None
    )

    result = AssemblyAITranscriber(transcriber).transcribe(b"audio")

    assert result.text == "I was falling slowly"
    assert result.word_count == 4


def test_assemblyai_error_status_raises_upstream_error() -> None:
    transcriber = MagicMock()
    transcriber.transcribe.return_value = SimpleNamespace(
        status=aai.TranscriptStatus.error, text=None, error="bad audio"
    )

    with pytest.raises(UpstreamServiceError) as excinfo:
        AssemblyAITranscriber(transcriber).transcribe(b"audio")

    assert excinfo.value.service == "assemblyai"


def test_assemblyai_empty_text_raises_upstream_error() -> None:
    transcriber = MagicMock()
    transcriber.transcribe.return_value = SimpleNamespace(
        status=aai.TranscriptStatus.completed, text="", error=None
    )

    with pytest.raises(UpstreamServiceError):
        AssemblyAITranscriber(transcriber).transcribe(b"audio")


def test_gemini_passes_generation_settings() -> None:
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text='{"ok": true}')

    text = GeminiLLMService(client, "gemini-2.5-flash").generate("system", "prompt", 0.7, 4000)

    assert text == '{"ok": true}'
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"]["system_instruction"] == "system"
    assert kwargs["config"]["temperature"] == 0.7
    assert kwargs["config"]["max_output_tokens"] == 4000


def test_gemini_failure_is_wrapped() -> None:
    client = MagicMock()
    client.models.generate_content.side_effect = RuntimeError("quota")

    with pytest.raises(UpstreamServiceError) as excinfo:
        GeminiLLMService(client, "gemini-2.5-flash").generate("system", "prompt", 0.7, 4000)

    assert isinstance(excinfo.value.cause, RuntimeError)


def test_aspect_ratio_from_size() -> None:
    assert aspect_ratio_for("1024x1024") == "1:1"
    assert aspect_ratio_for("1792x1024") == "7:4"


def test_imagen_stores_png_and_returns_presigned_url() -> None:
    storage = InMemoryStorage()
    client = MagicMock()
    client.models.generate_images.return_value = SimpleNamespace(
        generated_images=[
            SimpleNamespace(
                image=SimpleNamespace(image_bytes=b"\x89PNG"),
                enhanced_prompt="A glass city at dusk",
            )
        ]
    )

    image = ImagenImageService(client, "imagen", storage, "dream-images").generate(
        "A city of glass", "1024x1024", "vivid"
    )

    [(bucket, object_name)] = storage.objects
    assert bucket == "dream-images"
    assert storage.objects[(bucket, object_name)] == b"\x89PNG"
    assert image.url == f"https://storage.local/dream-images/{object_name}"
    assert image.revised_prompt == "A glass city at dusk"
    assert client.models.generate_images.call_args.kwargs["config"]["aspect_ratio"] == "1:1"


def test_imagen_without_images_raises_upstream_error() -> None:
    client = MagicMock()
    client.models.generate_images.return_value = SimpleNamespace(generated_images=[])

    with pytest.raises(UpstreamServiceError):
        ImagenImageService(client, "imagen", InMemoryStorage(), "dream-images").generate(
            "prompt", "1024x1024", "vivid"
        )


def test_minio_upload_and_presigned_url() -> None:
    client = MagicMock()
    client.presigned_get_object.return_value = "https://minio.local/signed"
    storage = MinioStorageClient(client, url_ttl=timedelta(hours=2))

    storage.upload("dream-audio", "owner/a.webm", io.BytesIO(b"abc"), 3, "audio/webm")
    url = storage.presigned_url("dream-images", "a.png")

    assert client.put_object.call_args.kwargs["length"] == 3
    assert url == "https://minio.local/signed"
    client.presigned_get_object.assert_called_once_with(
        "dream-images", "a.png", expires=timedelta(hours=2)
    )


def test_minio_remove_failure_raises_delete_error() -> None:
    client = MagicMock()
    client.remove_object.side_effect = RuntimeError("connection refused")

    with pytest.raises(StorageDeleteError):
        MinioStorageClient(client).remove("dream-audio", "owner/a.webm")
