"""MinIO implementation of the StorageClient interface."""

from datetime import timedelta
from typing import BinaryIO

from minio import Minio

from ..exceptions import StorageDeleteError, StorageDownloadError, StorageUploadError
from ..logging import setup_logging
from .interfaces import StorageClient

logger = setup_logging()


class MinioStorageClient(StorageClient):
    """Handles file storage operations using MinIO."""

    def __init__(self, client: Minio, url_ttl: timedelta = timedelta(days=7)):
        self._client = client
        self._url_ttl = url_ttl

    def download(self, bucket_name: str, object_name: str) -> bytes:
        try:
            response = self._client.get_object(bucket_name, object_name)
            try:
                data = response.data
            finally:
                response.close()
                response.release_conn()
            logger.info(
                "File downloaded from MinIO",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            return data
        except Exception as e:
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "size": size,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def remove(self, bucket_name: str, object_name: str) -> None:
        try:
            self._client.remove_object(bucket_name, object_name)
            logger.info(
                "File removed from MinIO",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
        except Exception as e:
            logger.exception(
                "MinIO remove failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDeleteError(object_name, e) from e

    def presigned_url(self, bucket_name: str, object_name: str) -> str:
        return self._client.presigned_get_object(
            bucket_name, object_name, expires=self._url_ttl
        )

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        if not self._client.bucket_exists(bucket_name):
            self._client.make_bucket(bucket_name)
            logger.info("Bucket created", extra={"bucket_name": bucket_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": bucket_name})
