"""Handler orchestrating the end-to-end dream pipeline."""

import threading

from ..db_models import DreamRecord
from ..domain.analysis_contract import StructuredAnalysis
from ..domain.dream_analyzer import DreamAnalyzer
from ..domain.dream_illustrator import DreamIllustrator
from ..domain.models import (
    AudioResource,
    DreamImage,
    PipelineState,
    ProcessDreamRequest,
    ProcessDreamResult,
    ProsodyInsight,
    StageOutcome,
    StageStatus,
    TranscriptionResult,
    validate_duration,
)
from ..domain.prosody_job import ProsodyJobClient
from ..exceptions import DreamPipelineError, InputError, UpstreamServiceError
from ..infrastructure.interfaces import TranscriptionService
from ..logging import setup_logging
from ..repositories import DreamRepository
from .audio_store import AudioStore, HeldAudio

logger = setup_logging()

MAX_TITLE_LENGTH = 255


class DreamPipelineHandler:
    """Runs a recording through transcription, prosody, analysis, illustration and persistence."""

    def __init__(
        self,
        audio_store: AudioStore,
        transcription_service: TranscriptionService,
        prosody_client: ProsodyJobClient,
        analyzer: DreamAnalyzer,
        illustrator: DreamIllustrator | None,
        repository: DreamRepository,
    ):
        self._audio_store = audio_store
        self._transcription_service = transcription_service
        self._prosody_client = prosody_client
        self._analyzer = analyzer
        self._illustrator = illustrator
        self._repository = repository

    def process(
        self,
        request: ProcessDreamRequest,
        cancel_event: threading.Event | None = None,
    ) -> ProcessDreamResult:
        """
        Processes one uploaded recording into a persisted, analysed dream.

        The uploaded audio is released exactly once, right after the stages
        that need it, whether they succeed or not.

        Args:
            request: The stored audio and the owner it belongs to.
            cancel_event: Set to abandon an in-flight prosody wait.

        Returns:
            ProcessDreamResult with the new dream's identifier.

        Raises:
            InputError: If the audio or its declared duration is invalid.
            UpstreamServiceError: If transcription or analysis fails.
            AnalysisParseError: If the analysis does not match the contract.
            PersistenceError: If the dream record could not be saved.
            DreamPipelineError: For any other failure.
        """
        audio = request.audio
        state = PipelineState.RECEIVED
        self._transition(state, request)

        try:
            with self._audio_store.hold(audio) as held:
                self._validate(audio)

                state = PipelineState.TRANSCRIBING
                self._transition(state, request)
                transcription = self._transcribe_held(held)

                state = PipelineState.PROSODY_ANALYZING
                self._transition(state, request)
                prosody = self._prosody_client.run(
                    held.read(), held.file_name, audio.content_type, cancel_event
                )
                held.release()

            state = PipelineState.ANALYZING
            self._transition(state, request)
            analysis = self._analyzer.analyze(transcription.text, audio.duration_seconds)

            state = PipelineState.IMAGE_SYNTHESIZING
            self._transition(state, request)
            image = self._illustrate(analysis)

            state = PipelineState.PERSISTING
            self._transition(state, request)
            dream_id = self._repository.create(
                self._build_record(request, transcription, analysis, prosody, image)
            )
        except DreamPipelineError as e:
            self._abort(request, state, e)
            raise
        except Exception as e:
            self._abort(request, state, e)
            raise DreamPipelineError("Dream processing failed", e) from e

        self._transition(PipelineState.DONE, request, dream_id=str(dream_id))

        return ProcessDreamResult(
            transcript=transcription.text,
            word_count=transcription.word_count,
            recording_duration=audio.duration_seconds,
            analysis=analysis,
            prosody=prosody.value,
            dream_image=image.value,
            dream_id=dream_id,
        )

    def transcribe(self, audio: AudioResource) -> TranscriptionResult:
        """Transcribes a stored recording and releases it."""
        with self._audio_store.hold(audio) as held:
            self._validate(audio)
            return self._transcribe_held(held)

    def analyze_transcript(self, transcript: str, duration_seconds: float) -> StructuredAnalysis:
        """Analyzes an already transcribed dream without persisting it."""
        validate_duration(duration_seconds)
        return self._analyzer.analyze(transcript, duration_seconds)

    def _validate(self, audio: AudioResource) -> None:
        if audio.size_bytes <= 0:
            raise InputError("No audio file provided")
        if audio.size_bytes > self._audio_store.max_upload_bytes:
            raise InputError("Audio file exceeds the upload size limit")
        validate_duration(audio.duration_seconds)

    def _transcribe_held(self, held: HeldAudio) -> TranscriptionResult:
        transcription = self._transcription_service.transcribe(held.read())
        if not transcription.text.strip():
            raise UpstreamServiceError("transcription", "Transcription returned no text")
        logger.info(
            "Dream transcribed",
            extra={
                "object_name": held.resource.object_name,
                "word_count": transcription.word_count,
            },
        )
        return transcription

    def _illustrate(self, analysis: StructuredAnalysis) -> StageOutcome[DreamImage]:
        if self._illustrator is None:
            return StageOutcome.skipped("not_configured")
        image = self._illustrator.illustrate(analysis)
        if image.url is None:
            return StageOutcome(StageStatus.FAILED, value=image, reason="failed")
        return StageOutcome.success(image)

    @staticmethod
    def _build_record(
        request: ProcessDreamRequest,
        transcription: TranscriptionResult,
        analysis: StructuredAnalysis,
        prosody: StageOutcome[ProsodyInsight],
        image: StageOutcome[DreamImage],
    ) -> DreamRecord:
        overview = analysis.overview
        return DreamRecord(
            owner_id=request.owner_id,
            title=overview.title[:MAX_TITLE_LENGTH],
            transcript=transcription.text,
            word_count=transcription.word_count,
            duration_seconds=request.duration_seconds,
            emotional_tone=overview.emotional_tone,
            dream_type=overview.dream_type.value,
            dream_type_confidence=overview.confidence,
            analysis=analysis.to_document(),
            prosody=(
                prosody.value.model_dump(mode="json", by_alias=True)
                if prosody.value is not None
                else None
            ),
            dream_image=(
                image.value.model_dump(mode="json", by_alias=True)
                if image.value is not None
                else None
            ),
        )

    @staticmethod
    def _transition(state: PipelineState, request: ProcessDreamRequest, **fields) -> None:
        logger.info(
            "Pipeline state changed",
            extra={
                "state": state.value,
                "owner_id": request.owner_id,
                "object_name": request.audio.object_name,
                **fields,
            },
        )

    @staticmethod
    def _abort(request: ProcessDreamRequest, state: PipelineState, error: Exception) -> None:
        logger.error(
            "Pipeline aborted",
            extra={
                "state": PipelineState.ABORTED.value,
                "failed_stage": state.value,
                "owner_id": request.owner_id,
                "error_kind": getattr(error, "kind", "internal_error"),
                "error": str(error),
            },
        )
