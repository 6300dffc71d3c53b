"""Transient storage for uploaded recordings."""

import os
from contextlib import contextmanager
from typing import BinaryIO, Iterator
from uuid import uuid4

from ..domain.models import AudioResource, validate_duration
from ..exceptions import InputError
from ..infrastructure.interfaces import StorageClient
from ..logging import setup_logging

logger = setup_logging()

_EXTENSIONS = {
    "audio/webm": ".webm",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/mpeg": ".mp3",
    "audio/mp4": ".m4a",
    "audio/ogg": ".ogg",
}


class HeldAudio:
    """An uploaded recording checked out for the duration of a request."""

    def __init__(self, storage: StorageClient, resource: AudioResource):
        self._storage = storage
        self.resource = resource
        self._data: bytes | None = None
        self._released = False

    @property
    def file_name(self) -> str:
        return os.path.basename(self.resource.object_name)

    @property
    def released(self) -> bool:
        return self._released

    def read(self) -> bytes:
        """Downloads the recording once and returns the cached bytes afterwards."""
        if self._released:
            raise RuntimeError("Audio resource already released")
        if self._data is None:
            self._data = self._storage.download(
                self.resource.bucket_name, self.resource.object_name
            )
        return self._data

    def release(self) -> None:
        """Deletes the stored recording. Subsequent calls do nothing."""
        if self._released:
            return
        self._released = True
        self._data = None
        try:
            self._storage.remove(self.resource.bucket_name, self.resource.object_name)
        except Exception:
            logger.exception(
                "Uploaded audio could not be deleted",
                extra={"object_name": self.resource.object_name},
            )


class AudioStore:
    """Stores uploads in a dedicated bucket and guarantees their cleanup."""

    def __init__(self, storage: StorageClient, bucket_name: str, max_upload_bytes: int):
        self._storage = storage
        self._bucket_name = bucket_name
        self.max_upload_bytes = max_upload_bytes

    def put(
        self,
        data: BinaryIO,
        size: int,
        content_type: str | None,
        duration_seconds: float,
        owner_id: str,
    ) -> AudioResource:
        """
        Stores an uploaded recording.

        Raises:
            InputError: If the upload is empty or exceeds the size ceiling,
                or the declared duration is not a finite, non-negative number.
            StorageUploadError: If the upload to storage fails.
        """
        if size <= 0:
            raise InputError("No audio file provided")
        if size > self.max_upload_bytes:
            raise InputError(
                f"Audio file exceeds the {self.max_upload_bytes // (1024 * 1024)} MB limit"
            )
        validate_duration(duration_seconds)

        content_type = content_type or "audio/webm"
        extension = _EXTENSIONS.get(content_type, ".webm")
        object_name = f"{owner_id}/{uuid4()}{extension}"
        self._storage.upload(
            bucket_name=self._bucket_name,
            object_name=object_name,
            data=data,
            size=size,
            content_type=content_type,
        )
        return AudioResource(
            bucket_name=self._bucket_name,
            object_name=object_name,
            content_type=content_type,
            size_bytes=size,
            duration_seconds=duration_seconds,
        )

    @contextmanager
    def hold(self, resource: AudioResource) -> Iterator[HeldAudio]:
        """Yields the recording and releases it on every exit path."""
        held = HeldAudio(self._storage, resource)
        try:
            yield held
        finally:
            held.release()
