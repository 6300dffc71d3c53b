"""Abstract interface for an asynchronous prosody batch-job backend."""

from abc import ABC, abstractmethod
from typing import Any


class ProsodyJobService(ABC):
    """Submits audio for prosody analysis and reads job state and predictions."""

    @abstractmethod
    def submit(self, audio_data: bytes, file_name: str, content_type: str) -> str:
        """
        Submits a prosody batch job.

        Returns:
            The job identifier.

        Raises:
            UpstreamServiceError: If the service rejects the job.
        """

    @abstractmethod
    def status(self, job_id: str, timeout: float | None = None) -> str:
        """
        Returns the job state, e.g. QUEUED, IN_PROGRESS, COMPLETED or FAILED.

        Args:
            job_id: The job identifier returned by submit.
            timeout: Upper bound in seconds for this request; None uses the
                backend default.
        """

    @abstractmethod
    def predictions(self, job_id: str) -> Any:
        """Returns the raw nested prediction payload of a completed job."""
