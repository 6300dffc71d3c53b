"""Dream pipeline and journal endpoints."""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Header, HTTPException, UploadFile

from ..dependencies import get_audio_store, get_journal, get_pipeline_handler
from ..domain.models import AudioResource, ProcessDreamRequest, validate_duration
from ..exceptions import (
    DreamAccessDeniedError,
    DreamNotFoundError,
    DreamPipelineError,
)
from ..handlers import AudioStore, DreamJournal, DreamPipelineHandler
from ..logging import setup_logging
from ..response_models import (
    AnalyzeTranscriptRequest,
    DreamResponse,
    DreamUpdate,
    HealthResponse,
)

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["dreams"])

HandlerDep = Annotated[DreamPipelineHandler, Depends(get_pipeline_handler)]
AudioStoreDep = Annotated[AudioStore, Depends(get_audio_store)]
JournalDep = Annotated[DreamJournal, Depends(get_journal)]

_STATUS_BY_KIND = {
    "input_error": 400,
    "upstream_service_error": 502,
    "analysis_parse_error": 502,
    "persistence_error": 500,
    "internal_error": 500,
}


def get_owner_id(x_owner_id: Annotated[str, Header(min_length=1)]) -> str:
    """Resolves the calling owner from the X-Owner-Id header."""
    return x_owner_id


OwnerDep = Annotated[str, Depends(get_owner_id)]


def _pipeline_error(error: DreamPipelineError) -> HTTPException:
    status_code = _STATUS_BY_KIND.get(error.kind, 500)
    message = "Internal server error" if error.kind == "internal_error" else str(error)
    return HTTPException(status_code=status_code, detail={"kind": error.kind, "message": message})


def _not_found(dream_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=404, detail={"kind": "not_found", "message": f"Dream {dream_id} not found"}
    )


def _store_upload(
    audio_store: AudioStore, audio: UploadFile, duration: float, owner_id: str
) -> AudioResource:
    validate_duration(duration)
    return audio_store.put(
        data=audio.file,
        size=audio.size or 0,
        content_type=audio.content_type,
        duration_seconds=duration,
        owner_id=owner_id,
    )


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@router.post("/transcribe")
def transcribe(
    audio: UploadFile,
    owner_id: OwnerDep,
    audio_store: AudioStoreDep,
    handler: HandlerDep,
) -> dict:
    """Transcribes a recording without analysing or saving it."""
    try:
        resource = _store_upload(audio_store, audio, 0.0, owner_id)
        result = handler.transcribe(resource)
    except DreamPipelineError as e:
        raise _pipeline_error(e)
    except Exception as e:
        logger.exception("Transcription request failed")
        raise _pipeline_error(DreamPipelineError("Internal server error", e))
    return {"transcript": result.text, "wordCount": result.word_count}


@router.post("/analyze")
def analyze(body: AnalyzeTranscriptRequest, handler: HandlerDep) -> dict:
    """Analyses a transcript without saving it."""
    try:
        analysis = handler.analyze_transcript(body.transcript, body.duration)
    except DreamPipelineError as e:
        raise _pipeline_error(e)
    return {"analysis": analysis.to_document()}


@router.post("/process-dream")
def process_dream(
    audio: UploadFile,
    owner_id: OwnerDep,
    audio_store: AudioStoreDep,
    handler: HandlerDep,
    duration: float = Form(0.0),
) -> dict:
    """
    Runs an uploaded recording through the full pipeline.

    Returns the transcript, analysis, prosody, image and the new dream id.
    """
    logger.info(
        "Received dream upload",
        extra={
            "file_name": audio.filename,
            "content_type": audio.content_type,
            "size": audio.size,
            "owner_id": owner_id,
        },
    )
    try:
        resource = _store_upload(audio_store, audio, duration, owner_id)
        result = handler.process(ProcessDreamRequest(audio=resource, owner_id=owner_id))
    except DreamPipelineError as e:
        raise _pipeline_error(e)
    except Exception as e:
        logger.exception("Dream upload failed")
        raise _pipeline_error(DreamPipelineError("Internal server error", e))
    return result.to_response()


@router.get("/dreams", response_model=List[DreamResponse])
def list_dreams(owner_id: OwnerDep, journal: JournalDep):
    """Returns the caller's dreams, newest first."""
    try:
        return [DreamResponse.from_record(record) for record in journal.list_dreams(owner_id)]
    except DreamPipelineError as e:
        raise _pipeline_error(e)


@router.get("/dreams/{dream_id}", response_model=DreamResponse)
def get_dream(dream_id: UUID, owner_id: OwnerDep, journal: JournalDep):
    try:
        return DreamResponse.from_record(journal.get_dream(dream_id, owner_id))
    except DreamNotFoundError:
        raise _not_found(dream_id)
    except DreamPipelineError as e:
        raise _pipeline_error(e)


@router.patch("/dreams/{dream_id}", response_model=DreamResponse)
def update_dream(dream_id: UUID, body: DreamUpdate, owner_id: OwnerDep, journal: JournalDep):
    """Updates the title, archive flag or privacy flag of a dream."""
    try:
        return DreamResponse.from_record(journal.update_dream(dream_id, owner_id, body))
    except DreamNotFoundError:
        raise _not_found(dream_id)
    except DreamAccessDeniedError:
        raise HTTPException(
            status_code=403,
            detail={"kind": "forbidden", "message": "Not allowed to modify this dream"},
        )
    except DreamPipelineError as e:
        raise _pipeline_error(e)


@router.delete("/dreams/{dream_id}", status_code=204)
def delete_dream(dream_id: UUID, owner_id: OwnerDep, journal: JournalDep) -> None:
    try:
        journal.delete_dream(dream_id, owner_id)
    except DreamNotFoundError:
        raise _not_found(dream_id)
    except DreamAccessDeniedError:
        raise HTTPException(
            status_code=403,
            detail={"kind": "forbidden", "message": "Not allowed to delete this dream"},
        )
    except DreamPipelineError as e:
        raise _pipeline_error(e)
