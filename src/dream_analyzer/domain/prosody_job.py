"""Polling state machine around a prosody batch job.

The client never raises: every failure path ends in a terminal state whose
outcome carries no insight. Clock and sleep are injectable so timeouts can be
exercised without real waiting.
"""

import threading
import time
from enum import Enum
from typing import Callable

from ..exceptions import ProsodyTimeoutError
from ..infrastructure.interfaces import ProsodyJobService
from ..logging import setup_logging
from .models import ProsodyInsight, StageOutcome
from .prosody import extract_prosody_insights

logger = setup_logging()

DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_TIMEOUT_SECONDS = 30.0


class ProsodyJobState(str, Enum):
    NOT_CONFIGURED = "not_configured"
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class _Cancelled(Exception):
    pass


class ProsodyJobClient:
    """Submits a recording for prosody analysis and waits for the result."""

    def __init__(
        self,
        service: ProsodyJobService | None,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._service = service
        self._poll_interval = poll_interval_seconds
        self._timeout = timeout_seconds
        self._max_polls = max(1, int(timeout_seconds // poll_interval_seconds))
        self._clock = clock
        self._sleep = sleep

    @property
    def configured(self) -> bool:
        return self._service is not None

    def analyze(
        self,
        audio_data: bytes,
        file_name: str,
        content_type: str,
        cancel_event: threading.Event | None = None,
    ) -> ProsodyInsight | None:
        """Returns the prosody insight, or None when the job produced nothing."""
        return self.run(audio_data, file_name, content_type, cancel_event).value

    def run(
        self,
        audio_data: bytes,
        file_name: str,
        content_type: str,
        cancel_event: threading.Event | None = None,
    ) -> StageOutcome[ProsodyInsight]:
        """Runs the job to a terminal state and reports it as a tagged outcome."""
        if self._service is None:
            return StageOutcome.skipped(ProsodyJobState.NOT_CONFIGURED.value)

        try:
            job_id = self._service.submit(audio_data, file_name, content_type)
        except Exception as e:
            logger.warning("Prosody job submission failed", extra={"error": str(e)})
            return StageOutcome.failed(ProsodyJobState.FAILED.value)

        try:
            state = self._poll(job_id, cancel_event)
            if state is ProsodyJobState.FAILED:
                return StageOutcome.failed(state.value)
            insight = extract_prosody_insights(self._service.predictions(job_id))
            logger.info(
                "Prosody job completed",
                extra={"job_id": job_id, "overall_tone": insight.overall_tone.value},
            )
            return StageOutcome.success(insight)
        except ProsodyTimeoutError as e:
            logger.warning(str(e), extra={"job_id": job_id})
            return StageOutcome.failed(ProsodyJobState.TIMED_OUT.value)
        except _Cancelled:
            logger.info("Prosody job wait cancelled", extra={"job_id": job_id})
            return StageOutcome.failed(ProsodyJobState.CANCELLED.value)
        except Exception as e:
            logger.warning(
                "Prosody job polling failed",
                extra={"job_id": job_id, "error": str(e)},
            )
            return StageOutcome.failed(ProsodyJobState.FAILED.value)

    def _poll(
        self, job_id: str, cancel_event: threading.Event | None
    ) -> ProsodyJobState:
        """
        Waits then checks until the job is terminal; returns COMPLETED or FAILED.

        Neither the sleeps nor the status requests may run past the timeout:
        each sleep and each request timeout is cut to the remaining budget.
        """
        started = self._clock()
        polls = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise _Cancelled()

            remaining = self._timeout - (self._clock() - started)
            if polls >= self._max_polls or remaining <= 0:
                raise ProsodyTimeoutError(job_id, self._clock() - started)

            self._sleep(min(self._poll_interval, remaining))
            polls += 1

            remaining = self._timeout - (self._clock() - started)
            if remaining <= 0:
                raise ProsodyTimeoutError(job_id, self._clock() - started)

            status = self._service.status(job_id, timeout=remaining)
            logger.debug(
                "Prosody job polled",
                extra={"job_id": job_id, "status": status, "poll": polls},
            )
            if status == "COMPLETED":
                return ProsodyJobState.COMPLETED
            if status == "FAILED":
                return ProsodyJobState.FAILED
