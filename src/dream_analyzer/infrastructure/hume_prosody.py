"""Hume batch-job implementation of the ProsodyJobService interface."""

import base64
from typing import Any

import httpx

from ..exceptions import UpstreamServiceError
from ..logging import setup_logging
from .interfaces import ProsodyJobService

logger = setup_logging()

SERVICE_NAME = "hume"
JOBS_PATH = "/v0/batch/jobs"


def build_hume_client(api_key: str, base_url: str, timeout_seconds: float) -> httpx.Client:
    """Creates an httpx client authenticated against the Hume API."""
    return httpx.Client(
        base_url=base_url,
        headers={"X-Hume-Api-Key": api_key},
        timeout=timeout_seconds,
    )


class HumeProsodyJobService(ProsodyJobService):
    """Talks to the Hume expression-measurement batch API."""

    def __init__(self, client: httpx.Client):
        self._client = client

    def submit(self, audio_data: bytes, file_name: str, content_type: str) -> str:
        payload = {
            "models": {"prosody": {"granularity": "utterance"}},
            "files": [
                {
                    "filename": file_name,
                    "content_type": content_type,
                    "data": base64.b64encode(audio_data).decode("ascii"),
                }
            ],
        }
        response = self._client.post(JOBS_PATH, json=payload)
        if not response.is_success:
            logger.warning(
                "Prosody job submission rejected",
                extra={"status_code": response.status_code},
            )
            raise UpstreamServiceError(
                SERVICE_NAME, f"Job submission returned HTTP {response.status_code}"
            )

        job_id = response.json()["job_id"]
        logger.info("Prosody job submitted", extra={"job_id": job_id})
        return job_id

    def status(self, job_id: str, timeout: float | None = None) -> str:
        response = self._client.get(
            f"{JOBS_PATH}/{job_id}",
            timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
        )
        response.raise_for_status()
        return response.json()["state"]["status"]

    def predictions(self, job_id: str) -> Any:
        response = self._client.get(f"{JOBS_PATH}/{job_id}/predictions")
        response.raise_for_status()
        return response.json()
