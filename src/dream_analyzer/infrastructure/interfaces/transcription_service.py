"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from ...domain.models import TranscriptionResult


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, audio_data: bytes) -> TranscriptionResult:
        """
        Transcribes audio data into text.

        Args:
            audio_data: Raw audio file bytes.

        Returns:
            TranscriptionResult with the text and its word count.

        Raises:
            UpstreamServiceError: If the service fails or returns no text.
        """
