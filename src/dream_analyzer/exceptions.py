"""Custom exceptions for the dream analyzer."""

from uuid import UUID


class DreamPipelineError(Exception):
    """Base class for errors surfaced at the request boundary."""

    kind = "internal_error"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class InputError(DreamPipelineError):
    """Raised when the uploaded audio or transcript is missing or invalid."""

    kind = "input_error"


class UpstreamServiceError(DreamPipelineError):
    """Raised when a required external service call fails."""

    kind = "upstream_service_error"

    def __init__(self, service: str, message: str, cause: Exception | None = None):
        self.service = service
        super().__init__(f"{service}: {message}", cause)


class AnalysisParseError(DreamPipelineError):
    """Raised when the LLM output cannot be coerced into the analysis contract."""

    kind = "analysis_parse_error"


class PersistenceError(DreamPipelineError):
    """Raised when a dream record could not be written or read."""

    kind = "persistence_error"


class ProsodyTimeoutError(TimeoutError):
    """Raised inside the prosody client when polling exceeds its ceiling."""

    def __init__(self, job_id: str, waited_seconds: float):
        self.job_id = job_id
        self.waited_seconds = waited_seconds
        super().__init__(
            f"Prosody job '{job_id}' did not finish within {waited_seconds:.0f}s"
        )


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDeleteError(Exception):
    """Raised when removing a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to delete '{object_name}' from storage")


class DreamNotFoundError(Exception):
    """Raised when a dream does not exist or is not visible to the caller."""

    def __init__(self, dream_id: UUID):
        self.dream_id = dream_id
        super().__init__(f"Dream {dream_id} not found")


class DreamAccessDeniedError(Exception):
    """Raised when a caller tries to modify a dream they do not own."""

    def __init__(self, dream_id: UUID, owner_id: str):
        self.dream_id = dream_id
        self.owner_id = owner_id
        super().__init__(f"Owner '{owner_id}' may not modify dream {dream_id}")
