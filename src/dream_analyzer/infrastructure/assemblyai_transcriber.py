"""AssemblyAI implementation of the TranscriptionService interface."""

import tempfile

import assemblyai as aai

from ..domain.models import TranscriptionResult
from ..exceptions import UpstreamServiceError
from ..logging import setup_logging
from .interfaces import TranscriptionService

logger = setup_logging()

SERVICE_NAME = "assemblyai"


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    def transcribe(self, audio_data: bytes) -> TranscriptionResult:
        """
        Transcribes audio data using AssemblyAI.

        Writes audio to a temp file (required by AssemblyAI SDK),
        performs transcription, and returns the text with its word count.
        """
        try:
            with tempfile.NamedTemporaryFile(suffix=".webm", delete=True) as temp_file:
                temp_file.write(audio_data)
                temp_file.flush()

                transcription = self._transcriber.transcribe(temp_file.name)

            if transcription.status == aai.TranscriptStatus.error:
                raise UpstreamServiceError(SERVICE_NAME, str(transcription.error))

            if not transcription.text or not transcription.text.strip():
                raise UpstreamServiceError(SERVICE_NAME, "Transcription returned no text")

            result = TranscriptionResult.from_text(transcription.text.strip())
            logger.info(
                "Audio transcription successful",
                extra={"word_count": result.word_count},
            )
            return result

        except UpstreamServiceError:
            raise
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise UpstreamServiceError(SERVICE_NAME, f"Transcription failed: {e}", e) from e
